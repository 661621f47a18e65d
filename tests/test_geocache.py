"""Tests for geocoin.cache — coins and geocaches."""

import pytest

from geocoin.cache.coin import Coin
from geocoin.cache.geocache import Geocache, MementoError
from geocoin.world.cell import Cell


class TestCoin:
    """Tests for the Coin value type."""

    def test_identity(self) -> None:
        assert Coin(origin=Cell(5, -2), serial=7).identity == "5:-2#7"

    def test_dict_form(self) -> None:
        coin = Coin(origin=Cell(1, 2), serial=3)
        assert coin.to_dict() == {"i": 1, "j": 2, "serial": 3}
        assert Coin.from_dict(coin.to_dict()) == coin

    def test_from_dict_rejects_bad_fields(self) -> None:
        with pytest.raises(KeyError):
            Coin.from_dict({"i": 1, "j": 2})
        with pytest.raises(TypeError):
            Coin.from_dict({"i": 1, "j": 2, "serial": "3"})


class TestGeocache:
    """Tests for collect, deposit and mementos."""

    def test_create(self) -> None:
        cache = Geocache.create(Cell(5, 5), 3)
        assert cache.num_coins == 3
        assert [c.serial for c in cache.coins] == [0, 1, 2]
        assert [c.identity for c in cache.coins] == ["5:5#0", "5:5#1", "5:5#2"]

    def test_create_empty(self) -> None:
        assert Geocache.create(Cell(0, 0), 0).num_coins == 0

    def test_create_negative_count(self) -> None:
        with pytest.raises(ValueError):
            Geocache.create(Cell(0, 0), -1)

    def test_collect_is_lifo(self) -> None:
        cache = Geocache.create(Cell(1, 1), 3)
        coin = cache.collect_coin()
        assert coin is not None
        assert coin.identity == "1:1#2"
        assert cache.num_coins == 2

    def test_collect_empty_returns_none(self) -> None:
        cache = Geocache.create(Cell(1, 1), 0)
        assert cache.collect_coin() is None
        assert cache.num_coins == 0

    def test_deposit_goes_on_top(self) -> None:
        cache = Geocache.create(Cell(1, 1), 2)
        foreign = Coin(origin=Cell(9, 9), serial=4)
        cache.deposit_coin(foreign)
        assert cache.num_coins == 3
        assert cache.collect_coin() == foreign

    def test_memento_format(self) -> None:
        cache = Geocache.create(Cell(1, -1), 2)
        assert cache.to_memento() == "[[1,-1,0],[1,-1,1]]"

    def test_memento_round_trip(self) -> None:
        """Mixed-origin coins survive a round trip in order."""
        cache = Geocache.create(Cell(3, 4), 4)
        cache.collect_coin()
        cache.deposit_coin(Coin(origin=Cell(-8, 2), serial=17))
        memento = cache.to_memento()

        restored = Geocache(cell=Cell(3, 4))
        restored.from_memento(memento)
        assert restored.coins == cache.coins
        assert restored.to_memento() == memento

    def test_restore(self) -> None:
        cache = Geocache.restore(Cell(2, 2), "[[2,2,0],[7,7,3]]")
        assert [c.identity for c in cache.coins] == ["2:2#0", "7:7#3"]

    def test_from_memento_replaces_contents(self) -> None:
        cache = Geocache.create(Cell(2, 2), 10)
        cache.from_memento("[]")
        assert cache.num_coins == 0

    @pytest.mark.parametrize(
        "memento",
        ["not json", "{}", "[[1,2]]", '[["1",2,3]]', "[[1,2,3.5]]", "[[1,2,true]]"],
    )
    def test_malformed_memento(self, memento: str) -> None:
        cache = Geocache.create(Cell(2, 2), 3)
        with pytest.raises(MementoError):
            cache.from_memento(memento)
        assert cache.num_coins == 3

    def test_deeply_nested_memento(self) -> None:
        cache = Geocache.create(Cell(2, 2), 3)
        with pytest.raises(MementoError):
            cache.from_memento("[" * 100_000 + "]" * 100_000)
        assert cache.num_coins == 3

    def test_memento_error_is_value_error(self) -> None:
        assert issubclass(MementoError, ValueError)
