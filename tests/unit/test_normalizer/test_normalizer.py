"""
Unit tests for order_lookup.normalizer.

Both upstream shapes must map onto the same OrderSummary semantics.
"""

import dataclasses

import pytest

from order_lookup.models import LineItem, OrderSummary, TrackingInfo
from order_lookup.normalizer import normalize_graph_order, normalize_rest_order


class TestRestNormalizer:
    """Tests for the REST order shape."""

    def test_maps_fields(self, rest_order):
        order = normalize_rest_order(rest_order(order_number=1001, quantities=(2, 3)))

        assert order.order_number == "1001"
        assert order.created_at == "2024-01-01T10:00:00Z"
        assert order.total_price == "25.00"
        assert order.currency_code == "USD"
        assert order.items_count == 5
        assert [item.quantity for item in order.line_items] == [2, 3]
        assert order.line_items[0] == LineItem(title="Item 0", quantity=2, price="5.00")
        assert order.shipping_address == {"address1": "1 Main St", "city": "Springfield"}
        assert order.customer_email is None

    def test_missing_fulfillment_status_defaults_to_unfulfilled(self, rest_order):
        order = normalize_rest_order(rest_order(fulfillment_status=None))
        assert order.fulfillment_status == "unfulfilled"

    def test_keeps_fulfillment_status(self, rest_order):
        order = normalize_rest_order(rest_order(fulfillment_status="fulfilled"))
        assert order.fulfillment_status == "fulfilled"

    def test_no_fulfillments_means_no_tracking(self, rest_order):
        order = normalize_rest_order(rest_order(fulfillments=[]))
        assert order.tracking_info is None

    def test_tracking_from_first_fulfillment(self, rest_order):
        fulfillments = [
            {"tracking_number": "1Z999", "tracking_company": "UPS",
             "tracking_url": "https://ups.example/1Z999"},
            {"tracking_number": "OTHER", "tracking_company": "DHL", "tracking_url": None},
        ]
        order = normalize_rest_order(rest_order(fulfillments=fulfillments))
        assert order.tracking_info == TrackingInfo(
            number="1Z999", company="UPS", url="https://ups.example/1Z999"
        )

    def test_fulfillment_without_tracking_keeps_object(self, rest_order):
        """A fulfillment with no tracking numbers still yields an object."""
        order = normalize_rest_order(rest_order(fulfillments=[{"status": "success"}]))
        assert order.tracking_info == TrackingInfo(number=None, company=None, url=None)

    def test_no_line_items(self, rest_order):
        order = normalize_rest_order(rest_order(quantities=()))
        assert order.items_count == 0
        assert order.line_items == ()


class TestGraphNormalizer:
    """Tests for the GraphQL order shape."""

    def test_maps_nested_fields(self, graph_order):
        raw = graph_order(name="#1002", quantities=(1, 4))
        raw["customer_name"] = "Ada Lovelace"
        raw["customer_email"] = "ada@example.com"

        order = normalize_graph_order(raw)

        assert order.order_number == "1002"
        assert order.total_price == "25.0"
        assert order.currency_code == "USD"
        assert order.items_count == 5
        assert order.line_items[1] == LineItem(title="Item 1", quantity=4, price="5.0")
        assert order.fulfillment_status == "fulfilled"
        assert order.shipping_address["city"] == "Springfield"
        assert order.customer_name == "Ada Lovelace"
        assert order.customer_email == "ada@example.com"

    def test_status_lowercased_to_rest_vocabulary(self, graph_order):
        order = normalize_graph_order(graph_order(status="PARTIALLY_FULFILLED"))
        assert order.fulfillment_status == "partially_fulfilled"

    def test_missing_status_defaults_to_unfulfilled(self, graph_order):
        order = normalize_graph_order(graph_order(status=None))
        assert order.fulfillment_status == "unfulfilled"

    def test_no_fulfillments_means_no_tracking(self, graph_order):
        assert normalize_graph_order(graph_order(fulfillments=[])).tracking_info is None

    def test_fulfillment_without_tracking_entries_means_no_tracking(self, graph_order):
        order = normalize_graph_order(graph_order(fulfillments=[{"trackingInfo": []}]))
        assert order.tracking_info is None

    def test_tracking_from_first_entry(self, graph_order):
        fulfillments = [{"trackingInfo": [
            {"number": "TRK1", "company": "USPS", "url": "https://usps.example/TRK1"},
            {"number": "TRK2", "company": "USPS", "url": None},
        ]}]
        order = normalize_graph_order(graph_order(fulfillments=fulfillments))
        assert order.tracking_info == TrackingInfo(
            number="TRK1", company="USPS", url="https://usps.example/TRK1"
        )

    def test_missing_shipping_address(self, graph_order):
        raw = graph_order()
        raw["shippingAddress"] = None
        assert normalize_graph_order(raw).shipping_address is None


class TestItemsCountInvariant:
    """items_count always matches the line items."""

    @pytest.mark.parametrize("quantities", [(), (1,), (2, 0, 7), (10, 10, 10, 1)])
    def test_both_variants(self, rest_order, graph_order, quantities):
        rest = normalize_rest_order(rest_order(quantities=quantities))
        graph = normalize_graph_order(graph_order(quantities=quantities))

        assert rest.items_count == sum(i.quantity for i in rest.line_items) == sum(quantities)
        assert graph.items_count == sum(i.quantity for i in graph.line_items) == sum(quantities)

    def test_mismatched_count_rejected(self):
        with pytest.raises(ValueError, match="items_count"):
            OrderSummary(
                order_number="1", created_at="", total_price="0.00",
                items_count=3, line_items=[LineItem(title="x", quantity=1, price="1")],
            )


class TestToDict:
    """Tests for OrderSummary.to_dict."""

    def test_rest_order_omits_customer_fields(self, rest_order):
        data = normalize_rest_order(rest_order(fulfillments=[])).to_dict()
        assert "customer_name" not in data
        assert "customer_email" not in data
        assert data["tracking_info"] is None
        assert data["line_items"] == [{"title": "Item 0", "quantity": 1, "price": "5.00"}]

    def test_tracking_serialized_with_all_keys(self, rest_order):
        data = normalize_rest_order(rest_order(fulfillments=[{}])).to_dict()
        assert data["tracking_info"] == {"number": None, "company": None, "url": None}


class TestImmutability:
    """Normalized orders cannot be changed after construction."""

    def test_order_fields_are_frozen(self, rest_order):
        order = normalize_rest_order(rest_order(quantities=(1,)))

        with pytest.raises(dataclasses.FrozenInstanceError):
            order.fulfillment_status = "fulfilled"
        with pytest.raises(dataclasses.FrozenInstanceError):
            order.line_items[0].quantity = 5
        with pytest.raises(AttributeError):
            order.line_items.append(LineItem(title="x", quantity=1, price="1"))

    def test_line_items_stored_as_tuple(self):
        order = OrderSummary(
            order_number="1", created_at="", total_price="1.00", items_count=1,
            line_items=[LineItem(title="x", quantity=1, price="1")],
        )
        assert order.line_items == (LineItem(title="x", quantity=1, price="1"),)
