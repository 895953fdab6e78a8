from textwrap import dedent

from hospital_billing import calculate_billing, calculate_room_billing
from hospital_billing.reporting.format import render_bill, render_breakdown_table, render_result
from helpers import NOW, service, usage


def _ambulance():
    svc = service(
        "composite",
        price="300",
        name="Ambulance",
        parameters='{"fixedCharge": 300, "perKmRate": 20}',
    )
    return calculate_billing(usage(svc, custom_parameters={"distance": 5}), now=NOW)


def test_render_breakdown_table():
    expected = dedent(
        """
        | Item | Unit Price | Qty | Subtotal |
        |---|---:|---:|---:|
        | Ambulance - Base Charge | ₹300.00 | 1 | ₹300.00 |
        | Distance (5 km) | ₹20.00 | 5 | ₹100.00 |
        | **Total** | | | **₹400.00** |
        """
    ).strip()
    assert render_breakdown_table(_ambulance()) == expected


def test_render_result_includes_title_and_details():
    text = render_result(_ambulance(), title="Trip | 12 Jan")

    assert text.startswith("### Trip \\| 12 Jan\n")
    assert "| Distance (5 km) | ₹20.00 | 5 | ₹100.00 |" in text
    assert text.endswith("_Ambulance - Base Charge: ₹300 + Distance (5 km): ₹100 = ₹400_")


def test_render_bill_totals_all_items():
    room = calculate_room_billing(2000, "2025-01-01T10:00:00Z", "2025-01-02T11:00:00Z")
    text = render_bill([("Room", room), ("Ambulance", _ambulance())])

    lines = text.splitlines()
    assert lines[2] == "| Room | 2 | ₹4,000.00 |"
    assert lines[3] == "| Ambulance | 1 | ₹400.00 |"
    assert lines[-1] == "| **Grand total** | | **₹4,400.00** |"


def test_render_bill_empty():
    assert render_bill([]) == ""
