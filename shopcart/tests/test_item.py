from __future__ import annotations

from decimal import Decimal

from django.test import SimpleTestCase

from shopcart.exceptions import InvalidArgument
from shopcart.item import Item, ItemOptions, gen_hash


class ItemInitTests(SimpleTestCase):
    def test_fields_and_subtotal(self):
        item = Item.init(7, "Tee", 3, 9.5, {"size": "M"})
        self.assertEqual(item.id, 7)
        self.assertEqual(item.title, "Tee")
        self.assertEqual(item.qty, 3)
        self.assertEqual(item.price, 9.5)
        self.assertEqual(item.subtotal, 28.5)
        self.assertIsInstance(item.options, ItemOptions)
        self.assertIsNone(item.associated)
        self.assertEqual(item.hash, gen_hash(7, None, {"size": "M"}))

    def test_coerces_qty_and_price(self):
        item = Item.init("sku-1", "Mug", "2", Decimal("4.25"))
        self.assertEqual(item.qty, 2)
        self.assertIsInstance(item.qty, int)
        self.assertEqual(item.price, 4.25)
        self.assertIsInstance(item.price, float)
        self.assertEqual(item.subtotal, 8.5)

        truncated = Item.init("sku-1", "Mug", 2.9, "1.5")
        self.assertEqual(truncated.qty, 2)
        self.assertEqual(truncated.subtotal, 3.0)

    def test_rejects_bad_arguments(self):
        bad = [
            (None, "Tee", 1, 1.0),
            ("", "Tee", 1, 1.0),
            ("   ", "Tee", 1, 1.0),
            (1, "", 1, 1.0),
            (1, "Tee", 0, 1.0),
            (1, "Tee", -2, 1.0),
            (1, "Tee", "lots", 1.0),
            (1, "Tee", True, 1.0),
            (1, "Tee", 1, -0.01),
            (1, "Tee", 1, "free"),
            (1, "Tee", 1, None),
        ]
        for args in bad:
            with self.subTest(args=args):
                with self.assertRaises(InvalidArgument):
                    Item.init(*args)

    def test_invalid_argument_is_a_value_error(self):
        with self.assertRaises(ValueError):
            Item.init(1, "", 1, 1.0)

    def test_zero_id_and_free_items_are_allowed(self):
        item = Item.init(0, "Sticker", 1, 0)
        self.assertEqual(item.subtotal, 0.0)


class ItemHashTests(SimpleTestCase):
    def test_option_order_does_not_matter(self):
        a = Item.init(1, "Tee", 1, 10, {"size": "M", "color": "red"})
        b = Item.init(1, "Tee", 1, 10, {"color": "red", "size": "M"})
        self.assertEqual(a.hash, b.hash)

    def test_one_option_value_changes_the_hash(self):
        a = Item.init(1, "Tee", 1, 10, {"size": "M", "color": "red"})
        b = Item.init(1, "Tee", 1, 10, {"size": "M", "color": "blue"})
        self.assertNotEqual(a.hash, b.hash)

    def test_title_qty_price_are_not_part_of_identity(self):
        a = Item.init(1, "Tee", 1, 10)
        b = Item.init(1, "Another tee", 4, 12)
        self.assertEqual(a.hash, b.hash)

    def test_associated_is_part_of_identity(self):
        a = Item.init(1, "Tee", associated="catalog.Product")
        b = Item.init(1, "Tee", associated="catalog.GiftCard")
        self.assertNotEqual(a.hash, b.hash)

    def test_option_keys_are_text(self):
        mixed = Item.init(1, "Tee", options={"size": "M", 2: "x"})
        self.assertEqual(dict(mixed.options), {"size": "M", "2": "x"})
        self.assertEqual(mixed.hash, Item.init(1, "Tee", options={"2": "x", "size": "M"}).hash)
        self.assertEqual(Item.from_dict(mixed.to_dict()).options, mixed.options)

    def test_nested_option_values_are_rejected(self):
        for options in ({"fit": {"cut": "slim"}}, {"sizes": ["M", "L"]}):
            with self.subTest(options=options):
                with self.assertRaises(InvalidArgument):
                    Item.init(1, "Tee", options=options)
        with self.assertRaises(InvalidArgument):
            Item.init(1, "Tee", options="red")

    def test_id_is_compared_as_text(self):
        self.assertEqual(gen_hash(1, None), gen_hash("1", None))


class ItemUpdateTests(SimpleTestCase):
    def setUp(self) -> None:
        self.item = Item.init(1, "Tee", 2, 10, {"size": "M"})

    def test_qty_and_price_recompute_subtotal(self):
        before = self.item.hash
        self.item.update({"qty": "4", "price": 2.5})
        self.assertEqual(self.item.qty, 4)
        self.assertEqual(self.item.price, 2.5)
        self.assertEqual(self.item.subtotal, 10.0)
        self.assertEqual(self.item.hash, before)

    def test_options_are_merged_and_rehashed(self):
        self.item.update({"options": {"color": "red", "size": "L"}})
        self.assertEqual(dict(self.item.options), {"size": "L", "color": "red"})
        self.assertEqual(self.item.hash, gen_hash(1, None, {"color": "red", "size": "L"}))

    def test_price_must_stay_non_negative(self):
        with self.assertRaises(InvalidArgument):
            self.item.update({"price": -5})
        self.assertEqual(self.item.price, 10.0)
        self.assertEqual(self.item.subtotal, 20.0)

    def test_protected_fields_are_ignored(self):
        before = self.item.to_dict()
        self.item.update({"hash": "x", "id": 99, "subtotal": 1000, "associated": "catalog.Product"})
        self.assertEqual(self.item.to_dict(), before)

    def test_title_literal_mode_stores_key_name(self):
        # historical behaviour: the title-cased attribute name wins over the value
        self.item.update({"title": "vintage tee"})
        self.assertEqual(self.item.title, "Title")

    def test_title_value_mode_stores_title_cased_value(self):
        self.item.update({"title": "vintage tee"}, title_mode="value")
        self.assertEqual(self.item.title, "Vintage Tee")


class ItemOptionsTests(SimpleTestCase):
    def test_attribute_and_key_access(self):
        opts = ItemOptions({"size": "M"})
        self.assertEqual(opts.size, "M")
        self.assertEqual(opts["size"], "M")
        self.assertIsNone(opts.get("color"))
        with self.assertRaises(AttributeError):
            opts.color

    def test_merge_returns_new_options(self):
        opts = ItemOptions({"size": "M", "color": "red"})
        merged = opts.merge({"size": "L", "fit": "slim"})
        self.assertEqual(merged, {"size": "L", "color": "red", "fit": "slim"})
        self.assertEqual(opts, {"size": "M", "color": "red"})
        self.assertIsInstance(merged, ItemOptions)

    def test_intersect_matches_key_and_value(self):
        opts = ItemOptions({"size": "M", "color": "red"})
        self.assertEqual(opts.intersect({"color": "red", "size": "L", "fit": "slim"}), {"color": "red"})
        self.assertTrue(opts.intersect({"color": "blue"}).is_empty)
        self.assertTrue(opts.intersect(None).is_empty)

    def test_is_empty(self):
        self.assertTrue(ItemOptions().is_empty)
        self.assertFalse(ItemOptions({"a": 1}).is_empty)


class ItemSerializationTests(SimpleTestCase):
    def test_dict_round_trip(self):
        item = Item.init(3, "Cap", 2, 7.25, {"color": "black"}, "catalog.Product")
        clone = Item.from_dict(item.to_dict())
        self.assertEqual(clone, item)
        self.assertIsInstance(clone.options, ItemOptions)

    def test_copy_is_detached(self):
        item = Item.init(3, "Cap", 2, 7.25, {"color": "black"})
        snapshot = item.copy()
        item.update({"qty": 9, "options": {"color": "white"}})
        self.assertEqual(snapshot.qty, 2)
        self.assertEqual(snapshot.options.color, "black")
