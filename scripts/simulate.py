"""
Load Simulation Script

Fires concurrent order traffic at a running API to check that ids stay
unique and the status/delete guards hold under load.
Run from project root: python scripts/simulate.py

Version: 1.0.0
"""

import asyncio
import random
import sys
import time
import argparse
from datetime import datetime
from typing import Any

import httpx

# Configuration
API_BASE_URL = "http://localhost:5001"
TOTAL_ORDERS = 50

STREETS = ["Main St", "Broadway", "5th Avenue", "Park Ave", "Madison Ave", "Lexington Ave"]
MENU = [
    {"name": "Pizza Margherita", "price": 15, "description": "Tomato, mozzarella, basil"},
    {"name": "Caesar Salad", "price": 9, "description": "Romaine, parmesan, croutons"},
    {"name": "Pasta Carbonara", "price": 14, "description": "Guanciale, egg, pecorino"},
    {"name": "Tiramisu", "price": 8, "description": "Espresso-soaked ladyfingers"},
]
STATUS_PATH = ["preparing", "out-for-delivery"]


def generate_order_payload(dish_ids: list[str]) -> dict[str, Any]:
    """Generate a random order body for POST /orders."""
    lines = [
        {"dishId": dish_id, "quantity": random.randint(1, 3)}
        for dish_id in random.sample(dish_ids, k=random.randint(1, len(dish_ids)))
    ]
    return {
        "data": {
            "deliverTo": f"{random.randint(1, 999)} {random.choice(STREETS)}",
            "mobileNumber": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
            "dishes": lines,
        }
    }


async def create_menu(client: httpx.AsyncClient) -> list[str]:
    """Create the demo dishes and return their ids."""
    dish_ids = []
    for dish in MENU:
        response = await client.post(
            f"{API_BASE_URL}/dishes",
            json={"data": {**dish, "image_url": "https://example.com/dish.jpg"}},
        )
        response.raise_for_status()
        dish_ids.append(response.json()["data"]["id"])
    return dish_ids


async def run_order_lifecycle(
    client: httpx.AsyncClient,
    order_num: int,
    dish_ids: list[str],
) -> dict[str, Any]:
    """Create an order, then either delete it or walk it through the status path."""
    start_time = time.time()

    try:
        response = await client.post(
            f"{API_BASE_URL}/orders",
            json=generate_order_payload(dish_ids),
            timeout=30.0,
        )
        if response.status_code != 201:
            return {
                "order_num": order_num,
                "success": False,
                "error": response.text[:100],
                "time": round(time.time() - start_time, 3),
            }

        order = response.json()["data"]
        order_id = order["id"]

        if order_num % 3 == 0:
            response = await client.delete(f"{API_BASE_URL}/orders/{order_id}")
            expected, action = 204, "deleted"
        else:
            for status in STATUS_PATH:
                order["status"] = status
                response = await client.put(
                    f"{API_BASE_URL}/orders/{order_id}", json={"data": order}
                )
                if response.status_code != 200:
                    break
            expected, action = 200, "advanced"

        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "order_id": order_id,
            "success": response.status_code == expected,
            "action": action,
            "error": None if response.status_code == expected else response.text[:100],
            "time": elapsed,
        }
    except Exception as e:
        elapsed = round(time.time() - start_time, 3)
        return {
            "order_num": order_num,
            "success": False,
            "error": str(e)[:100],
            "time": elapsed,
        }


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(num_orders: int = TOTAL_ORDERS) -> dict[str, Any]:
    """
    Run the load simulation.

    Args:
        num_orders: Number of order lifecycles to run concurrently
    """
    print("=" * 70)
    print("🔥 LOAD SIMULATION - CONCURRENT ORDER LIFECYCLES")
    print("=" * 70)
    print(f"📋 Total Orders: {num_orders}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        dish_ids = await create_menu(client)
        print(f"\n🍽️  Created {len(dish_ids)} dishes\n")

        tasks = [run_order_lifecycle(client, i + 1, dish_ids) for i in range(num_orders)]
        results = await asyncio.gather(*tasks)

        # A delivered order must refuse further edits
        survivors = [r for r in results if r["success"] and r.get("action") == "advanced"]
        frozen_ok = None
        if survivors:
            order_id = survivors[0]["order_id"]
            order = (await client.get(f"{API_BASE_URL}/orders/{order_id}")).json()["data"]
            order["status"] = "delivered"
            response = await client.put(f"{API_BASE_URL}/orders/{order_id}", json={"data": order})
            frozen_ok = response.status_code == 400

    total_time = round(time.time() - start_time, 2)

    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]
    order_ids = [r["order_id"] for r in results if r.get("order_id")]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)

    print(f"\n✅ Successful Lifecycles: {len(successful)}/{num_orders}")
    print(f"❌ Failed Lifecycles: {len(failed)}/{num_orders}")
    print(f"⏱️  Total Time: {total_time}s")
    print(f"🆔 Unique Order Ids: {len(set(order_ids))}/{len(order_ids)}")
    if frozen_ok is not None:
        print(f"🔒 Delivered guard: {'held' if frozen_ok else 'BROKEN'}")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        print(f"\n📈 Performance Metrics:")
        print(f"   Average Lifecycle: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")

    if failed:
        print(f"\n⚠️  Failed Lifecycle Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Order #{f['order_num']}: {f.get('error', 'Unknown error')}")

    print("\n" + "=" * 70)

    return {
        "total": num_orders,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def check_health() -> bool:
    """Pre-flight check before the simulation."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/health")
        except httpx.HTTPError as e:
            print(f"   ❌ Failed: {e}")
            return False

    if response.status_code != 200:
        print(f"   ❌ Failed: {response.text}")
        return False

    data = response.json()
    print(f"   ✅ Status: {data.get('status')}")
    print(f"   Dishes: {data.get('dishes')}, Orders: {data.get('orders')}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Load Simulation Script")
    parser.add_argument("--orders", type=int, default=TOTAL_ORDERS, help="Number of orders")
    parser.add_argument("--url", default=API_BASE_URL, help="API base URL")
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    print("\n1️⃣ Health Check...")
    if not asyncio.run(check_health()):
        print("\n❌ Pre-flight check failed. Start the API first: restaurant-api")
        sys.exit(1)

    summary = asyncio.run(run_simulation(args.orders))
    sys.exit(0 if summary["failed"] == 0 else 1)
