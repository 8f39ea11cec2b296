import pandas as pd

from scripts.generate_mock_orders import VENDORS, generate_mock_orders
from scripts.run_order_simulation import load_orders


def test_generated_orders_load_into_carts(tmp_path):
    output = tmp_path / "orders.csv"

    df = generate_mock_orders(num_orders=40, output_file=str(output), seed=3)

    assert len(df) == 40
    assert set(df["vendor_id"]) <= {vendor["id"] for vendor in VENDORS}
    assert (df["qty"] >= 1).all()

    loaded = pd.read_csv(output, dtype={"vendor_id": str})
    assert list(loaded["order_ref"]) == list(df["order_ref"])

    carts = load_orders(str(output), limit=10)
    assert len(carts) == 10
    for cart, vendor_id, vendor_location, customer_location, _ in carts:
        assert cart.subtotal(vendor_id) > 0
        assert vendor_location.is_valid()
        assert customer_location is None or customer_location.is_valid()
