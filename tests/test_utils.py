"""Tests for the pure chunking, filtering and rollup helpers."""

import pytest

from daraz_relay.models.schemas import OrderItemsRecord, PayoutStatement, TransactionRecord
from daraz_relay.models.utils import (
    calculate_order_balances,
    chunk_ids,
    compact_params,
    extract_package_ids,
    filter_items_by_status,
    format_id_list,
    merge_chunk_results,
    parse_amount,
    summarize_balances,
    tag_items_with_token,
    unpaid_statements,
)


def records(*orders):
    return [OrderItemsRecord.model_validate(order) for order in orders]


def transactions(*rows):
    return [TransactionRecord.model_validate(row) for row in rows]


# ---------------------------------------------------------------------------
# chunking
# ---------------------------------------------------------------------------

def test_chunk_ids_splits_120_into_50_50_20():
    ids = list(range(120))
    chunks = chunk_ids(ids, 50)

    assert [len(c) for c in chunks] == [50, 50, 20]
    assert merge_chunk_results(chunks) == ids


@pytest.mark.parametrize("count, expected_chunks", [(0, 0), (1, 1), (50, 1), (51, 2), (100, 2), (101, 3)])
def test_chunk_count_is_ceiling_of_n_over_50(count, expected_chunks):
    assert len(chunk_ids(list(range(count)))) == expected_chunks


def test_chunk_ids_rejects_non_positive_size():
    with pytest.raises(ValueError):
        chunk_ids([1, 2], 0)


def test_format_id_list():
    assert format_id_list([101, 102, 103]) == "[101,102,103]"
    assert format_id_list(["7"]) == "[7]"


def test_merge_chunk_results_keeps_chunk_then_inner_order():
    assert merge_chunk_results([["a", "b"], [], ["c"]]) == ["a", "b", "c"]


def test_compact_params_drops_none_and_empty():
    assert compact_params(status="pending", created_after=None, update_after="") == {"status": "pending"}


# ---------------------------------------------------------------------------
# nested item filtering
# ---------------------------------------------------------------------------

def test_filter_items_by_status_drops_orders_left_empty():
    orders = records(
        {"order_id": 1, "order_items": [{"status": "delivered"}, {"status": "canceled"}]},
        {"order_id": 2, "order_items": [{"status": "canceled"}]},
        {"order_id": 3, "order_items": [{"status": "delivered"}]},
    )

    filtered = filter_items_by_status(orders, "delivered")

    assert [o.order_id for o in filtered] == [1, 3]
    assert [len(o.order_items) for o in filtered] == [1, 1]
    assert all(item.status == "delivered" for o in filtered for item in o.order_items)


def test_filter_items_by_status_does_not_mutate_input():
    orders = records({"order_id": 1, "order_items": [{"status": "delivered"}, {"status": "canceled"}]})
    filter_items_by_status(orders, "delivered")
    assert len(orders[0].order_items) == 2


def test_tag_items_with_token_preserves_other_fields():
    orders = records({"order_id": 1, "order_items": [{"status": "delivered", "sku": "SKU-1"}]})

    tagged = tag_items_with_token(orders, "TOKEN")
    dumped = tagged[0].model_dump(exclude_unset=True)

    assert dumped["order_items"] == [{"status": "delivered", "sku": "SKU-1", "access_token": "TOKEN"}]


# ---------------------------------------------------------------------------
# balance rollup
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("raw, expected", [
    ("1,000", 1000.0),
    ("-1,234.50", -1234.5),
    ("250.5", 250.5),
    (" 12.5 PKR", 12.5),
    (42, 42.0),
    (".5", 0.5),
    ("1e3", 1000.0),
    ("bad", None),
    ("", None),
    ("NaN", None),
])
def test_parse_amount(raw, expected):
    assert parse_amount(raw) == expected


def test_calculate_order_balances_drops_unparseable_records():
    rows = transactions(
        {"order_no": "A", "amount": "1,000"},
        {"order_no": "A", "amount": "250.5"},
        {"order_no": "B", "amount": "bad"},
    )

    balances = calculate_order_balances(rows)

    assert [b.model_dump() for b in balances] == [{"order_no": "A", "total_amount": 1250.5}]
    assert summarize_balances(rows, balances) == {
        "totalTransactions": 3,
        "totalOrders": 1,
        "totalAmount": 1250.5,
    }


def test_calculate_order_balances_keeps_first_seen_order():
    rows = transactions(
        {"order_no": "Z", "amount": "1"},
        {"order_no": "A", "amount": "2"},
        {"order_no": "Z", "amount": "-0.5"},
        {"order_no": "M", "amount": "3"},
    )

    balances = calculate_order_balances(rows)

    assert [(b.order_no, b.total_amount) for b in balances] == [("Z", 0.5), ("A", 2.0), ("M", 3.0)]


def test_calculate_order_balances_merges_string_and_numeric_order_no():
    rows = transactions(
        {"order_no": "123", "amount": "10"},
        {"order_no": 123, "amount": "5"},
    )

    balances = calculate_order_balances(rows)

    assert [(b.order_no, b.total_amount) for b in balances] == [("123", 15.0)]


def test_calculate_order_balances_skips_non_scalar_values():
    rows = transactions(
        {"order_no": "A", "amount": "10"},
        {"order_no": "B", "amount": {"value": "5"}},
        {"order_no": {"id": "C"}, "amount": "3"},
        {"order_no": "D", "amount": ["1"]},
    )

    balances = calculate_order_balances(rows)

    assert [(b.order_no, b.total_amount) for b in balances] == [("A", 10.0)]


def test_calculate_order_balances_skips_records_missing_fields():
    rows = transactions(
        {"amount": "10"},
        {"order_no": "A"},
        {"order_no": "", "amount": "5"},
        {"order_no": "A", "amount": ""},
        {"order_no": "A", "amount": "7"},
    )

    balances = calculate_order_balances(rows)

    assert [(b.order_no, b.total_amount) for b in balances] == [("A", 7.0)]
    assert summarize_balances(rows, balances)["totalTransactions"] == 5


def test_summarize_empty():
    assert summarize_balances([], []) == {"totalTransactions": 0, "totalOrders": 0, "totalAmount": 0}


# ---------------------------------------------------------------------------
# payouts / fulfillment
# ---------------------------------------------------------------------------

def test_unpaid_statements_filters_and_annotates_store():
    statements = [
        PayoutStatement.model_validate({"statement_number": "S1", "paid": "0"}),
        PayoutStatement.model_validate({"statement_number": "S2", "paid": "1"}),
    ]

    assert unpaid_statements(statements, "My Store") == [
        {"statement_number": "S1", "paid": "0", "storeName": "My Store"}
    ]


def test_extract_package_ids_from_all_known_shapes():
    response = {
        "result": {
            "data": {
                "pack_order_list": [
                    {"order_item_list": [{"package_id": "FP1"}, {"package_id": "FP2"}, {}]},
                    {"order_item_list": None},
                ],
                "packages": [{"package_id": "FP3"}],
                "package_id": "FP4",
            }
        }
    }

    assert extract_package_ids(response) == ["FP1", "FP2", "FP3", "FP4"]


@pytest.mark.parametrize("response", [{}, {"result": None}, {"result": {"data": []}}, None])
def test_extract_package_ids_handles_missing_data(response):
    assert extract_package_ids(response) == []
