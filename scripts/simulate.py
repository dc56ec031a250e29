"""
Storefront Simulation Script

Fires concurrent shopping sessions at a running server: each session fills a
cart, checks the cart totals, places an order from the cart contents and
clears the cart.

Run from project root (server must be running with a seeded menu):
    python scripts/simulate.py --sessions 50
"""

import argparse
import asyncio
import random
import sys
import time
import uuid
from datetime import datetime
from typing import Any

import httpx

API_BASE_URL = "http://localhost:3000"
TOTAL_SESSIONS = 50
TAX_RATE = 0.02

FIRST_NAMES = ["John", "Jane", "Mike", "Sarah", "Tom", "Emma", "David", "Lisa", "Chris", "Amy"]
LAST_NAMES = ["Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller", "Davis"]


def generate_random_customer() -> dict[str, str]:
    """Generate random customer info."""
    return {
        "name": f"{random.choice(FIRST_NAMES)} {random.choice(LAST_NAMES)}",
        "phone": f"555-{random.randint(100, 999)}-{random.randint(1000, 9999)}",
        "notes": random.choice(["", "Extra sauce", "No pickles", "Pickup at 6pm"]),
    }


def flatten_menu(grouped: dict[str, list[dict]]) -> list[dict]:
    return [item for items in grouped.values() for item in items]


def totals_consistent(cart: dict[str, Any], tax_rate: float = TAX_RATE) -> bool:
    """Check the cart's derived totals against its lines (to the cent)."""
    subtotal = round(sum(line["price"] * line["quantity"] for line in cart["items"]), 2)
    tax = round(subtotal * tax_rate, 2)
    return (
        abs(cart["subtotal"] - subtotal) < 0.005
        and abs(cart["tax"] - tax) < 0.015
        and abs(cart["total"] - (cart["subtotal"] + cart["tax"])) < 0.005
    )


# =============================================================================
# SESSION SIMULATION
# =============================================================================

async def run_session(
    client: httpx.AsyncClient,
    session_num: int,
    menu: list[dict],
    place_order: bool = True,
    tax_rate: float = TAX_RATE,
) -> dict[str, Any]:
    """Fill a cart, optionally order it, then clear it."""
    session_id = f"sim-{uuid.uuid4().hex[:12]}"
    start_time = time.time()

    try:
        for item in random.sample(menu, k=min(len(menu), random.randint(1, 4))):
            response = await client.post(
                f"{API_BASE_URL}/api/cart/{session_id}/items",
                json={"menuItemId": item["id"], "quantity": random.randint(1, 3)},
                timeout=30.0,
            )
            response.raise_for_status()

        cart = response.json()
        if not totals_consistent(cart, tax_rate):
            raise ValueError(f"Inconsistent totals: {cart['subtotal']}/{cart['tax']}/{cart['total']}")

        result = {
            "session_num": session_num,
            "success": True,
            "lines": len(cart["items"]),
            "total": cart["total"],
        }

        if place_order:
            response = await client.post(
                f"{API_BASE_URL}/api/orders",
                json={
                    "items": [
                        {"menuItemId": line["menuItemId"], "quantity": line["quantity"]}
                        for line in cart["items"]
                    ],
                    "customerInfo": generate_random_customer(),
                },
                timeout=30.0,
            )
            response.raise_for_status()
            result["order_number"] = response.json()["order"]["orderNumber"]

        response = await client.delete(f"{API_BASE_URL}/api/cart/{session_id}", timeout=30.0)
        response.raise_for_status()

        result["time"] = round(time.time() - start_time, 3)
        return result

    except (httpx.HTTPError, ValueError, KeyError) as e:
        return {
            "session_num": session_num,
            "success": False,
            "error": str(e)[:100],
            "time": round(time.time() - start_time, 3),
        }


# =============================================================================
# MAIN SIMULATION RUNNER
# =============================================================================

async def run_simulation(
    num_sessions: int = TOTAL_SESSIONS,
    place_orders: bool = True,
    tax_rate: float = TAX_RATE,
) -> dict[str, Any]:
    """
    Run the concurrent session simulation.

    Args:
        num_sessions: Number of shopping sessions to run at once
        place_orders: Place an order at the end of each session
        tax_rate: Tax rate the server is configured with
    """
    print("=" * 70)
    print("🔥 STOREFRONT SIMULATION - CONCURRENT SESSIONS")
    print("=" * 70)
    print(f"📋 Sessions: {num_sessions}")
    print(f"🎯 Target: {API_BASE_URL}")
    print(f"🧾 Place orders: {place_orders}")
    print(f"⏰ Started: {datetime.now().strftime('%H:%M:%S')}")
    print("=" * 70)

    start_time = time.time()

    async with httpx.AsyncClient() as client:
        response = await client.get(f"{API_BASE_URL}/api/menu")
        response.raise_for_status()
        menu = flatten_menu(response.json())
        if not menu:
            print("\n❌ Menu is empty. Seed it first: python scripts/seed.py")
            return {"total": 0, "successful": 0, "failed": 0, "results": []}

        tasks = [
            run_session(client, i + 1, menu, place_order=place_orders, tax_rate=tax_rate)
            for i in range(num_sessions)
        ]
        results = await asyncio.gather(*tasks)

    total_time = round(time.time() - start_time, 2)
    successful = [r for r in results if r["success"]]
    failed = [r for r in results if not r["success"]]

    print("\n" + "=" * 70)
    print("📊 SIMULATION RESULTS")
    print("=" * 70)
    print(f"\n✅ Successful Sessions: {len(successful)}/{num_sessions}")
    print(f"❌ Failed Sessions: {len(failed)}/{num_sessions}")
    print(f"⏱️  Total Time: {total_time}s")

    if successful:
        avg_time = round(sum(r["time"] for r in successful) / len(successful), 3)
        total_revenue = sum(r["total"] for r in successful)
        print("\n📈 Performance Metrics:")
        print(f"   Average Session: {avg_time}s")
        print(f"   Fastest: {min(r['time'] for r in successful)}s")
        print(f"   Slowest: {max(r['time'] for r in successful)}s")
        print(f"   💰 Total Cart Value: ${total_revenue:.2f}")

    if failed:
        print("\n⚠️  Failed Session Details (showing first 5):")
        for f in failed[:5]:
            print(f"   Session #{f['session_num']}: {f.get('error', 'Unknown error')}")

    print("=" * 70)

    return {
        "total": num_sessions,
        "successful": len(successful),
        "failed": len(failed),
        "total_time": total_time,
        "results": results,
    }


async def check_health() -> bool:
    """Pre-flight check against /api/health."""
    async with httpx.AsyncClient() as client:
        try:
            response = await client.get(f"{API_BASE_URL}/api/health", timeout=10.0)
        except httpx.HTTPError as e:
            print(f"❌ Server unreachable: {e}")
            return False

    if response.status_code != 200:
        print(f"❌ Health check failed: {response.text[:100]}")
        return False

    data = response.json()
    print(f"✅ Status: {data.get('status')} ({data.get('store')})")
    print(f"   Menu items: {data.get('menuItems')}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Storefront Simulation Script")
    parser.add_argument("--sessions", type=int, default=TOTAL_SESSIONS, help="Number of sessions")
    parser.add_argument("--carts-only", action="store_true", help="Do not place orders")
    parser.add_argument("--url", default=API_BASE_URL, help="Server base URL")
    parser.add_argument(
        "--tax-rate", type=float, default=TAX_RATE, help="Tax rate the server is configured with"
    )
    args = parser.parse_args()

    API_BASE_URL = args.url.rstrip("/")

    if not asyncio.run(check_health()):
        sys.exit(1)

    summary = asyncio.run(
        run_simulation(
            num_sessions=args.sessions,
            place_orders=not args.carts_only,
            tax_rate=args.tax_rate,
        )
    )
    sys.exit(0 if summary["failed"] == 0 else 1)
