import logging
import os
import random
from typing import List, Tuple

import pandas as pd

from dispatch.dispatcher import RiderDispatcher
from dispatch.state_machines.rider_state import set_availability
from orders.cart import Cart, checkout, quote_delivery
from orders.models import Actor, Order
from orders.repository import InMemoryOrderRepository
from orders.stats import rider_earnings, vendor_stats
from orders.tracker import OrderTracker
from riders.models import Rider
from routing.eta_service import format_eta
from routing.geo import Coordinate


def load_orders(filepath="mock_orders.csv", limit=50) -> List[Tuple[Cart, str, Coordinate, Coordinate, str]]:
    """
    Reads the generated CSV into carts ready for checkout.
    Returns (cart, vendor_id, vendor_location, customer_location, customer_id) tuples.
    """
    df = pd.read_csv(filepath, dtype={"vendor_id": str}).head(limit)

    rows = []
    for _, row in df.iterrows():
        cart = Cart()
        cart.add_item(row["vendor_id"], row["vendor_name"], row["item_title"], int(row["price"]), int(row["qty"]))

        vendor_location = Coordinate(float(row["vendor_lat"]), float(row["vendor_lng"]))
        customer_location = None
        if pd.notna(row["customer_lat"]) and pd.notna(row["customer_lng"]):
            customer_location = Coordinate(float(row["customer_lat"]), float(row["customer_lng"]))

        rows.append((cart, row["vendor_id"], vendor_location, customer_location, row["customer_id"]))
    return rows


def run_simulation(input_path="mock_orders.csv", limit=50, seed=7):
    print("=== STARTING ORDER LIFECYCLE SIMULATION ===")
    random.seed(seed)

    repository = InMemoryOrderRepository()
    tracker = OrderTracker(repository)
    dispatcher = RiderDispatcher(tracker)
    riders = [set_availability(Rider.new(f"rider_{i}", lat=6.2239, lng=7.1185), True) for i in range(3)]

    # 1. Checkout
    placed: List[Order] = []
    for cart, vendor_id, vendor_location, customer_location, customer_id in load_orders(input_path, limit):
        quote = quote_delivery(vendor_location, customer_location)
        order = checkout(cart, vendor_id, quote, customer_id)
        placed.append(tracker.place_order(order))
    print(f"Placed {len(placed)} orders.\n")

    # 2. Vendors prepare, riders deliver
    results = []
    for order in placed:
        vendor = Actor.vendor(order.vendor_id)

        if random.random() < 0.1:
            tracker.cancel(order.id, vendor)
            results.append((order, "-", "cancelled by vendor"))
            continue

        tracker.advance(order.id, vendor)  # New -> Preparing
        tracker.advance(order.id, vendor)  # Preparing -> Out for delivery

        rider_index = random.randrange(len(riders))
        outcome = dispatcher.accept(order.id, riders[rider_index])
        riders[rider_index] = outcome.rider

        note = "delivered"
        if random.random() < 0.15:
            wrong = dispatcher.complete(order.id, riders[rider_index], "0000")
            note = f"delivered after retry ({wrong.message})"

        outcome = dispatcher.complete(order.id, riders[rider_index], order.delivery_code)
        riders[rider_index] = outcome.rider
        results.append((order, riders[rider_index].id, note))

    # 3. Report
    base_dir = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
    output_path = os.path.join(base_dir, "simulation_results.csv")
    pd.DataFrame([
        {
            "order_id": order.id,
            "vendor": order.vendor_name,
            "distance_km": None if order.distance_km is None else round(order.distance_km, 2),
            "delivery_fee": order.delivery_fee,
            "eta": format_eta(order.eta),
            "total": order.total,
            "status": order.status.value,
            "rider": rider_id,
            "note": note,
        }
        for order, rider_id, note in results
    ]).to_csv(output_path, index=False)

    print("--- Vendor stats ---")
    all_orders = repository.list_by_status()
    for vendor_id in sorted({order.vendor_id for order in all_orders}):
        stats = vendor_stats(repository.list_by_status(vendor_id=vendor_id))
        print(f"  vendor {vendor_id}: {stats}")

    print("--- Rider earnings ---")
    for rider in riders:
        print(f"  {rider.id}: {rider_earnings(all_orders, rider.id)}")

    print("\n=== SIMULATION COMPLETE ===")
    print(f"Results written to '{output_path}'.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    run_simulation()
