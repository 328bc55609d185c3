"""Tests for collapsing owned copies into table rows."""

from futdash.models import ItemCategory
from futdash.pipeline import aggregate


class TestAggregate:
    """Test aggregate()."""

    def test_same_asset_and_rating_merge(self, make_player):
        """Copies sharing (asset id, rating) become one row counting them all."""
        players = [
            make_player(asset_id=1, rating=85, item_type=ItemCategory.TRANSFER),
            make_player(asset_id=1, rating=85, item_type=ItemCategory.STORAGE),
            make_player(asset_id=1, rating=85, item_type=ItemCategory.STORAGE),
            make_player(asset_id=1, rating=85, item_type=ItemCategory.DUPLICATED),
        ]

        result = aggregate(players)

        assert len(result) == 1
        assert result[0].copies == 4
        assert result[0].types == [
            ItemCategory.TRANSFER,
            ItemCategory.STORAGE,
            ItemCategory.DUPLICATED,
        ]

    def test_types_keep_first_appearance_order(self, make_player):
        players = [
            make_player(asset_id=7, item_type=ItemCategory.DUPLICATED),
            make_player(asset_id=7, item_type=ItemCategory.TRANSFER),
            make_player(asset_id=7, item_type=ItemCategory.DUPLICATED),
        ]

        result = aggregate(players)

        assert result[0].types == [ItemCategory.DUPLICATED, ItemCategory.TRANSFER]
        assert result[0].copies == 3

    def test_different_rating_never_merges(self, make_player):
        """A special version of a player is a different card."""
        players = [
            make_player(asset_id=231747, rating=91),
            make_player(asset_id=231747, rating=97),
        ]

        result = aggregate(players)

        assert [(p.asset_id, p.rating, p.copies) for p in result] == [
            (231747, 91, 1),
            (231747, 97, 1),
        ]

    def test_output_follows_first_seen_order(self, make_player):
        players = [
            make_player(asset_id=3),
            make_player(asset_id=1),
            make_player(asset_id=3),
            make_player(asset_id=2),
        ]

        result = aggregate(players)

        assert [p.asset_id for p in result] == [3, 1, 2]

    def test_copies_add_up_to_input_size(self, make_player):
        players = [
            make_player(asset_id=asset_id % 4, rating=80 + asset_id % 2)
            for asset_id in range(25)
        ]

        result = aggregate(players)

        assert sum(p.copies for p in result) == len(players)
        assert len({(p.asset_id, p.rating) for p in result}) == len(result)

    def test_input_not_mutated(self, make_player):
        players = [make_player(asset_id=1), make_player(asset_id=1)]
        before = [p.model_dump() for p in players]

        aggregate(players)

        assert [p.model_dump() for p in players] == before

    def test_empty(self):
        assert aggregate([]) == []
