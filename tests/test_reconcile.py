from cafe.lib.reconcile import reconcile_financials


def test_delivery_order_below_threshold():
    assert reconcile_financials(520, "Delivery") == {
        "sub_total": 476.19,
        "gst_amount": 23.81,
        "delivery_charge": 20,
        "total": 520,
    }


def test_delivery_order_above_threshold():
    assert reconcile_financials(630, "Delivery") == {
        "sub_total": 600,
        "gst_amount": 30,
        "delivery_charge": 0,
        "total": 630,
    }


def test_dine_in_order():
    result = reconcile_financials(315, "Dine-in")
    assert result["sub_total"] == 300
    assert result["gst_amount"] == 15
    assert result["delivery_charge"] == 0


def test_stored_values_are_kept():
    result = reconcile_financials(
        440, "Delivery", sub_total=400, gst_amount=20, delivery_charge=20
    )
    assert result == {"sub_total": 400, "gst_amount": 20, "delivery_charge": 20, "total": 440}


def test_partial_breakdown_is_completed():
    result = reconcile_financials(440, "Delivery", sub_total=400)
    assert result["gst_amount"] == 20
    assert result["delivery_charge"] == 20


def test_stored_delivery_charge_drives_gst():
    result = reconcile_financials(440, "Delivery", sub_total=400, delivery_charge=20)
    assert result["gst_amount"] == 20
