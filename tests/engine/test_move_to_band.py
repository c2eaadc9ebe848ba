"""Tests for move_to_band, with and without a target position."""

import pytest

from atomchain.exceptions import NotFoundInChain


class TestMoveToBandEnd:
    def test_other_type_gets_band_after_target(self, engine, make_chain, layout, shape):
        chain = make_chain(("A", "type1", ["a1", "a2"]), ("B", "type2", ["b1"]))
        engine.move_to_band(chain, "a2", "B")

        assert shape(chain) == [("type1", ["a1"]), ("type2", ["b1"]), ("type1", ["a2"])]
        new_id = chain.bands[2].id
        assert [band_id for band_id, _, _ in layout(chain)] == ["A", "B", new_id]
        assert new_id.lower() not in {"a", "b"}

    def test_same_type_appends(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1", "a2"]), ("B", "image", ["b1"]), ("C", "text", ["c1"]))
        engine.move_to_band(chain, "a1", "C")
        assert layout(chain) == [
            ("A", "text", ["a2"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["c1", "a1"]),
        ]

    def test_same_type_drops_emptied_source(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1"]), ("B", "image", ["b1"]), ("C", "text", ["c1"]))
        engine.move_to_band(chain, "a1", "c")
        assert layout(chain) == [("B", "image", ["b1"]), ("C", "text", ["c1", "a1"])]

    def test_joins_following_band_of_own_type(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1", "a2"]), ("B", "image", ["b1"]), ("C", "text", ["c1"]))
        engine.move_to_band(chain, "a1", "B")
        assert layout(chain) == [
            ("A", "text", ["a2"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["a1", "c1"]),
        ]

    def test_single_atom_source_moves_with_its_band(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1"]), ("B", "image", ["b1"]), ("C", "video", ["c1"]))
        engine.move_to_band(chain, "a1", "B")
        assert [band_id for band_id, _, _ in layout(chain)] == ["B", "A", "C"]

    def test_single_atom_source_after_target(self, engine, make_chain, layout):
        chain = make_chain(("B", "image", ["b1"]), ("C", "video", ["c1"]), ("A", "text", ["a1"]))
        engine.move_to_band(chain, "a1", "B")
        assert [band_id for band_id, _, _ in layout(chain)] == ["B", "A", "C"]

    def test_new_band_copies_source_styles(self, engine, make_chain):
        chain = make_chain(("A", "text", ["a1", "a2"]), ("B", "image", ["b1"]))
        chain.bands[0].styles = {"align": "left"}
        engine.move_to_band(chain, "a2", "B")

        copied = chain.bands[2]
        assert copied.styles == {"align": "left"}
        assert copied.styles is not chain.bands[0].styles

    def test_own_band_moves_atom_to_end(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1", "a2", "a3"]))
        engine.move_to_band(chain, "a1", "A")
        assert layout(chain) == [("A", "text", ["a2", "a3", "a1"])]

    def test_emptied_band_lets_neighbours_merge(self, engine, make_chain, layout):
        chain = make_chain(
            ("A", "text", ["a1"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["c1"]),
            ("D", "image", ["d1"]),
        )
        engine.move_to_band(chain, "b1", "D")
        assert layout(chain) == [("A", "text", ["a1", "c1"]), ("D", "image", ["d1", "b1"])]

    def test_raw_engine_keeps_split_result(self, raw_engine, make_chain, layout):
        chain = make_chain(
            ("A", "text", ["a1"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["c1"]),
            ("D", "image", ["d1"]),
        )
        raw_engine.move_to_band(chain, "b1", "D")
        assert layout(chain) == [
            ("A", "text", ["a1"]),
            ("C", "text", ["c1"]),
            ("D", "image", ["d1", "b1"]),
        ]

    @pytest.mark.parametrize(("atom_id", "band_id", "kind"), [("zz", "B", "atom"), ("a1", "zz", "band")])
    def test_missing_ids(self, engine, make_chain, layout, atom_id, band_id, kind):
        chain = make_chain(("A", "text", ["a1"]), ("B", "image", ["b1"]))
        before = layout(chain)
        with pytest.raises(NotFoundInChain) as exc_info:
            engine.move_to_band(chain, atom_id, band_id)
        assert exc_info.value.kind == kind
        assert layout(chain) == before


class TestMoveToBandPosition:
    def test_same_band_degrades_to_move_in_band(self, engine, make_chain, layout):
        chain = make_chain(("A", "type1", ["a1", "a2", "a3"]))
        engine.move_to_band(chain, "a2", "A", 1)
        assert layout(chain) == [("A", "type1", ["a1", "a2", "a3"])]

        engine.move_to_band(chain, "a1", "A", 2)
        assert layout(chain) == [("A", "type1", ["a2", "a3", "a1"])]

    def test_position_past_end_appends(self, engine, make_chain, shape):
        chain = make_chain(("A", "text", ["a1", "a2"]), ("B", "image", ["b1"]))
        engine.move_to_band(chain, "a2", "B", 5)
        assert shape(chain) == [("text", ["a1"]), ("image", ["b1"]), ("text", ["a2"])]

    def test_same_type_inserts_at_position(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1", "a2"]), ("B", "image", ["b1"]), ("C", "text", ["c1", "c2"]))
        engine.move_to_band(chain, "a1", "C", 1)
        assert layout(chain) == [
            ("A", "text", ["a2"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["c1", "a1", "c2"]),
        ]

    def test_same_type_drops_emptied_source(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1"]), ("B", "image", ["b1"]), ("C", "text", ["c1", "c2"]))
        engine.move_to_band(chain, "a1", "C", 0)
        assert layout(chain) == [("B", "image", ["b1"]), ("C", "text", ["a1", "c1", "c2"])]

    def test_front_of_first_band_moves_single_atom_band(self, engine, make_chain, layout):
        chain = make_chain(("B", "image", ["b1", "b2"]), ("A", "text", ["a1"]))
        engine.move_to_band(chain, "a1", "B", 0)
        assert layout(chain) == [("A", "text", ["a1"]), ("B", "image", ["b1", "b2"])]

    def test_front_of_first_band_splits_off_atom(self, engine, make_chain, layout, shape):
        chain = make_chain(("B", "image", ["b1"]), ("A", "text", ["a1", "a2"]))
        engine.move_to_band(chain, "a2", "B", 0)

        assert shape(chain) == [("text", ["a2"]), ("image", ["b1"]), ("text", ["a1"])]
        assert [band_id for band_id, _, _ in layout(chain)][1:] == ["B", "A"]

    def test_front_of_later_band_appends_to_previous(self, engine, make_chain, layout):
        chain = make_chain(("A", "text", ["a1"]), ("B", "image", ["b1"]), ("C", "video", ["c1", "c2"]))
        engine.move_to_band(chain, "a1", "C", 0)
        assert layout(chain) == [
            ("B", "image", ["b1"]),
            ("A", "text", ["a1"]),
            ("C", "video", ["c1", "c2"]),
        ]

    def test_front_of_later_band_joins_previous_of_same_type(self, engine, make_chain, layout):
        chain = make_chain(
            ("A", "text", ["a1", "a2"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["c1"]),
            ("D", "video", ["d1", "d2"]),
        )
        engine.move_to_band(chain, "a1", "D", 0)
        assert layout(chain) == [
            ("A", "text", ["a2"]),
            ("B", "image", ["b1"]),
            ("C", "text", ["c1", "a1"]),
            ("D", "video", ["d1", "d2"]),
        ]

    def test_interior_split_with_single_atom_source(self, engine, make_chain, layout):
        chain = make_chain(("A", "type1", ["a1"]), ("B", "type2", ["b1", "b2", "b3"]))
        chain.bands[1].styles = {"width": "full"}
        engine.move_to_band(chain, "a1", "B", 2)

        result = layout(chain)
        tail_id = result[2][0]
        assert result == [
            ("B", "type2", ["b1", "b2"]),
            ("A", "type1", ["a1"]),
            (tail_id, "type2", ["b3"]),
        ]
        assert tail_id.lower() not in {"a", "b"}
        assert chain.bands[2].styles == {"width": "full"}

    def test_interior_split_with_larger_source(self, engine, make_chain, layout, shape):
        chain = make_chain(("A", "text", ["a1", "a2"]), ("B", "image", ["b1", "b2"]))
        engine.move_to_band(chain, "a2", "B", 1)

        assert shape(chain) == [
            ("text", ["a1"]),
            ("image", ["b1"]),
            ("text", ["a2"]),
            ("image", ["b2"]),
        ]
        band_ids = [band_id.lower() for band_id, _, _ in layout(chain)]
        assert band_ids[:2] == ["a", "b"]
        assert len(set(band_ids)) == 4

    def test_negative_position_is_front(self, engine, make_chain, layout):
        chain = make_chain(("B", "image", ["b1", "b2"]), ("A", "text", ["a1"]))
        engine.move_to_band(chain, "a1", "B", -4)
        assert layout(chain) == [("A", "text", ["a1"]), ("B", "image", ["b1", "b2"])]

    @pytest.mark.parametrize(("atom_id", "band_id"), [("zz", "B"), ("a1", "zz")])
    def test_missing_ids(self, engine, make_chain, layout, atom_id, band_id):
        chain = make_chain(("A", "text", ["a1"]), ("B", "image", ["b1", "b2"]))
        before = layout(chain)
        with pytest.raises(NotFoundInChain):
            engine.move_to_band(chain, atom_id, band_id, 1)
        assert layout(chain) == before
