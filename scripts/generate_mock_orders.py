import pandas as pd
import numpy as np
import uuid
from datetime import datetime, timezone, timedelta

# Demo vendor registry (Enugu)
VENDORS = [
    {"id": "1", "name": "Roban Mart", "lat": 6.2239, "lng": 7.1185},
    {"id": "2", "name": "FreshMart", "lat": 6.2242, "lng": 7.1190},
    {"id": "3", "name": "PharmaPlus", "lat": 6.2234, "lng": 7.1175},
    {"id": "4", "name": "Candles", "lat": 6.2234, "lng": 7.1175},
]

MENU = [
    ("Jollof Rice", 1200),
    ("Chicken", 800),
    ("Egusi Soup", 1500),
    ("Fufu", 300),
    ("Malt 33cl", 800),
    ("Dog Food", 1500),
]


def generate_mock_orders(num_orders=200, max_radius_deg=0.12, output_file="mock_orders.csv", seed=None):
    """
    Generates a dataset of customer orders around the demo vendors.
    Customers are scattered up to ~13 km (0.12 degrees) from their vendor so the
    fee covers both the floor and the distance-scaled range.
    """
    rng = np.random.default_rng(seed)
    now = datetime.now(timezone.utc)

    data = []
    for order_index in range(num_orders):
        vendor = VENDORS[rng.integers(0, len(VENDORS))]
        title, price = MENU[rng.integers(0, len(MENU))]

        # ~10% of customers never shared a location
        has_location = rng.random() >= 0.1
        customer_lat = vendor["lat"] + rng.uniform(-max_radius_deg, max_radius_deg) if has_location else np.nan
        customer_lng = vendor["lng"] + rng.uniform(-max_radius_deg, max_radius_deg) if has_location else np.nan

        data.append({
            "order_ref": f"o_{str(order_index+1).zfill(6)}",
            "created_at": (now - timedelta(minutes=int(rng.integers(0, 120)))).isoformat(),
            "customer_id": f"c_{str(uuid.uuid4())[:8]}",
            "vendor_id": vendor["id"],
            "vendor_name": vendor["name"],
            "vendor_lat": vendor["lat"],
            "vendor_lng": vendor["lng"],
            "customer_lat": np.round(customer_lat, 6),
            "customer_lng": np.round(customer_lng, 6),
            "item_title": title,
            "qty": int(rng.integers(1, 4)),
            "price": price,
        })

    df = pd.DataFrame(data)
    df.to_csv(output_file, index=False)
    print(f"Generated {num_orders} orders and saved to '{output_file}'")

    print("\nOrders per vendor:")
    counts = df["vendor_name"].value_counts()
    for name, count in counts.items():
        print(f"  {name}: {count} orders")

    return df


if __name__ == "__main__":
    generate_mock_orders(num_orders=200)
