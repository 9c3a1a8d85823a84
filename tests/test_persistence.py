"""
Tests for cart persistence and restore
"""

import json
from decimal import Decimal

import pytest

from storefront.core.store import DEFAULT_STORAGE_KEY, CartStore, deserialize_items, serialize_items
from storefront.exceptions import CartStateError
from storefront.models import Product
from storefront.storage import FileStorage, MemoryStorage
from tests.helpers import LockedStorage, make_modification


def stored(storage: MemoryStorage) -> list:
    return json.loads(storage.get_item(DEFAULT_STORAGE_KEY))


class TestSerialization:
    """Tests for the storage slot format."""

    def test_slot_shape(self, storage, sample_product):
        store = CartStore(storage)
        line = store.add_to_cart(sample_product)
        store.update_item_modifications(line.id, [make_modification("extra", "2.00", quantity=2)])

        data = stored(storage)

        assert len(data) == 1
        entry = data[0]
        assert set(entry) == {"id", "product", "quantity", "modifications", "customPrice"}
        assert entry["id"] == line.id
        assert entry["quantity"] == 1
        assert entry["customPrice"] == 26.9
        assert entry["product"]["id"] == "prod-xbacon"
        assert entry["product"]["price"] == "22.90"
        assert entry["product"]["imageUrl"] == "https://example.com/xbacon.jpg"
        assert entry["modifications"][0]["modificationType"] == "extra"
        assert entry["modifications"][0]["ingredientId"] == "ing-bacon"
        assert entry["modifications"][0]["unitPrice"] == 2.0

    def test_round_trip(self, storage, sample_product, other_product):
        store = CartStore(storage)
        a = store.add_to_cart(sample_product)
        b = store.add_to_cart(other_product)
        store.update_item_modifications(a.id, [
            make_modification("extra", "2.00", quantity=2),
            make_modification("remove", "1.00", ingredient_id="ing-onion", name="Cebola"),
        ])
        store.update_quantity(b.id, 3)
        store.update_item_modifications(b.id, [make_modification("remove", "20.00")])

        restored = CartStore(MemoryStorage(dict(storage.slots)))

        assert [item.id for item in restored.items] == [a.id, b.id]
        assert [
            (item.product.id, item.quantity, [mod.model_dump() for mod in item.modifications], item.custom_price)
            for item in restored.items
        ] == [
            (item.product.id, item.quantity, [mod.model_dump() for mod in item.modifications], item.custom_price)
            for item in store.items
        ]
        assert restored.subtotal == store.subtotal

    @pytest.mark.parametrize("price, expected", [(22.9, "22.90"), (22, "22.00"), ("7.5", "7.50")])
    def test_product_price_stored_with_two_places(self, storage, price, expected):
        store = CartStore(storage)
        store.add_to_cart(Product(id="p1", name="X", price=price))

        assert stored(storage)[0]["product"]["price"] == expected

    def test_deserialize_matches_serialize(self, storage, sample_product):
        store = CartStore(storage)
        store.add_to_cart(sample_product)

        restored = deserialize_items(serialize_items(store.items))

        assert [item.model_dump() for item in restored] == [item.model_dump() for item in store.items]


class TestNormalization:
    """Tests for restoring older and partial entries."""

    def test_legacy_entry_gets_id_and_defaults(self, sample_product_data):
        storage = MemoryStorage({
            DEFAULT_STORAGE_KEY: json.dumps([{"product": sample_product_data, "quantity": 2}]),
        })

        store = CartStore(storage)

        assert len(store.items) == 1
        line = store.items[0]
        assert line.id.startswith("cart_")
        assert line.quantity == 2
        assert line.modifications == []
        assert line.custom_price == Decimal("22.90")
        assert store.subtotal == Decimal("45.80")

    def test_legacy_entries_get_distinct_ids(self, sample_product_data):
        entry = {"product": sample_product_data, "quantity": 1}
        storage = MemoryStorage({DEFAULT_STORAGE_KEY: json.dumps([entry, entry])})

        store = CartStore(storage)

        assert len({item.id for item in store.items}) == 2

    def test_current_entry_missing_optional_fields(self, sample_product_data):
        storage = MemoryStorage({
            DEFAULT_STORAGE_KEY: json.dumps([
                {"id": "cart_abc", "product": sample_product_data, "quantity": 1},
                {
                    "id": "cart_def",
                    "product": sample_product_data,
                    "quantity": 1,
                    "modifications": None,
                    "customPrice": None,
                },
            ]),
        })

        store = CartStore(storage)

        assert [item.id for item in store.items] == ["cart_abc", "cart_def"]
        for item in store.items:
            assert item.modifications == []
            assert item.custom_price == Decimal("22.90")

    def test_stored_custom_price_is_kept(self, sample_product_data):
        storage = MemoryStorage({
            DEFAULT_STORAGE_KEY: json.dumps([
                {"id": "cart_abc", "product": sample_product_data, "quantity": 1, "customPrice": 19.5},
            ]),
        })

        store = CartStore(storage)

        assert store.items[0].custom_price == Decimal("19.5")

    def test_restore_does_not_write(self, sample_product_data):
        raw = json.dumps([{"product": sample_product_data, "quantity": 1}])
        storage = MemoryStorage({DEFAULT_STORAGE_KEY: raw})

        CartStore(storage)

        assert storage.get_item(DEFAULT_STORAGE_KEY) == raw


class TestMalformedState:
    """Tests for unreadable storage slots."""

    @pytest.mark.parametrize("raw", [
        "not json{",
        "",
        '{"items": []}',
        '[{"quantity": 1}]',
        '[{"id": "cart_abc", "product": {"id": "p", "name": "X", "price": "abc"}, "quantity": 1}]',
        '[{"id": "cart_abc", "product": {"id": "p", "name": "X", "price": "1.00"}, "quantity": 0}]',
        '[{"id": "cart_abc", "product": {"id": "p", "name": "X", "price": "1.00"}, "quantity": 1, "customPrice": -3}]',
    ])
    def test_resets_and_erases_slot(self, raw):
        storage = MemoryStorage({DEFAULT_STORAGE_KEY: raw})

        store = CartStore(storage)

        assert store.items == ()
        assert storage.get_item(DEFAULT_STORAGE_KEY) is None

    def test_one_bad_entry_discards_whole_cart(self, sample_product_data):
        storage = MemoryStorage({
            DEFAULT_STORAGE_KEY: json.dumps([
                {"id": "cart_ok", "product": sample_product_data, "quantity": 1},
                {"id": "cart_bad", "product": sample_product_data, "quantity": "lots"},
            ]),
        })

        store = CartStore(storage)

        assert store.items == ()
        assert storage.get_item(DEFAULT_STORAGE_KEY) is None

    def test_deserialize_raises_cart_state_error(self):
        with pytest.raises(CartStateError):
            deserialize_items("[1, 2, 3]")

    def test_other_keys_untouched(self):
        storage = MemoryStorage({DEFAULT_STORAGE_KEY: "garbage", "theme": "dark"})

        CartStore(storage)

        assert storage.get_item("theme") == "dark"

    def test_custom_storage_key(self, sample_product):
        storage = MemoryStorage({DEFAULT_STORAGE_KEY: "garbage"})

        store = CartStore(storage, storage_key="other-cart")
        store.add_to_cart(sample_product)

        assert storage.get_item(DEFAULT_STORAGE_KEY) == "garbage"
        assert len(json.loads(storage.get_item("other-cart"))) == 1

    def test_undecodable_file_resets_cart(self, tmp_path):
        slot = tmp_path / f"{DEFAULT_STORAGE_KEY}.json"
        slot.write_bytes(b"\xff\xfe[garbage")

        store = CartStore(FileStorage(tmp_path))

        assert store.items == ()
        assert not slot.exists()

    def test_erase_failure_is_logged(self, caplog):
        storage = LockedStorage({DEFAULT_STORAGE_KEY: "garbage"})

        store = CartStore(storage)

        assert store.items == ()
        assert "Failed to erase persisted cart" in caplog.text
