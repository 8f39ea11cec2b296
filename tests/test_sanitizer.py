from dispatch.sanitizer import sanitize_for_rider


def test_money_and_code_are_stripped_at_any_depth():
    payload = {
        "orders": [
            {
                "id": "o1",
                "vendorName": "Roban Mart",
                "deliveryFee": 1300,
                "deliveryCode": "8421",
                "subTotal": 3200,
                "orderTotal": 4500,
                "riderEarning": 1300,
                "items": [{"title": "Jollof Rice", "qty": 2, "price": 1200}],
                "pickup": {"lat": 6.2239, "lng": 7.1185},
            }
        ],
        "ok": True,
    }

    clean = sanitize_for_rider(payload)

    assert clean == {
        "orders": [
            {
                "id": "o1",
                "vendorName": "Roban Mart",
                "items": [{"title": "Jollof Rice", "qty": 2}],
                "pickup": {"lat": 6.2239, "lng": 7.1185},
            }
        ],
        "ok": True,
    }
    # the input is left alone
    assert payload["orders"][0]["deliveryFee"] == 1300


def test_only_whole_keys_match():
    clean = sanitize_for_rider({"Tip": 200, "tipsy": "yes", "total_items": 3, "PAYOUT": 1})
    assert clean == {"tipsy": "yes", "total_items": 3}


def test_scalars_pass_through():
    assert sanitize_for_rider("Out for delivery") == "Out for delivery"
    assert sanitize_for_rider(None) is None
