"""Tests for the CacheFactory — spawn decisions, initial counts, minting, region scan."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from geocoin.config import GameConfig
from geocoin.core.board import Board
from geocoin.core.models import Token
from geocoin.systems.cache_factory import CacheFactory
from geocoin.systems.rng import DeterministicRNG
from tests.helpers.game_fixture import ScriptedLuck


def _factory(rng=None, **overrides) -> CacheFactory:
    cfg = GameConfig(**overrides)
    board = Board(cfg.tile_width, cfg.visibility_radius)
    return CacheFactory(cfg, board, rng if rng is not None else DeterministicRNG(cfg.world_seed))


class TestScenarioCell:
    """Cell (3, -2) rolling 0.05 for spawn and 0.4 for its initial value."""

    def _scripted(self) -> tuple[CacheFactory, ScriptedLuck]:
        luck = ScriptedLuck({"3,-2": 0.05, "3,-2,initialValue": 0.4})
        return _factory(luck), luck

    def test_spawns(self):
        factory, _ = self._scripted()
        assert factory.should_spawn(factory._board.cell_at(3, -2))

    def test_initial_count(self):
        factory, _ = self._scripted()
        assert factory.initial_token_count(factory._board.cell_at(3, -2)) == 4

    def test_key_convention(self):
        factory, luck = self._scripted()
        cell = factory._board.cell_at(3, -2)
        factory.should_spawn(cell)
        factory.initial_token_count(cell)
        assert luck.calls == ["3,-2", "3,-2,initialValue"]

    def test_open_cache_mints_serials(self):
        factory, _ = self._scripted()
        cache = factory.open_cache(factory._board.cell_at(3, -2))
        assert cache.contents == [Token(3, -2, s) for s in range(4)]
        assert cache.active_count == cache.minted == 4

    def test_threshold_is_strict(self):
        luck = ScriptedLuck({"0,0": 0.1})
        factory = _factory(luck)
        assert not factory.should_spawn(factory._board.cell_at(0, 0))


class TestDeterminism:
    def test_spawn_independent_of_call_order(self):
        a, b = _factory(), _factory()
        cells_a = [a._board.cell_at(i, j) for i in range(-10, 10) for j in range(-10, 10)]
        cells_b = [b._board.cell_at(c.i, c.j) for c in reversed(cells_a)]
        forward = {(c.i, c.j): (a.should_spawn(c), a.initial_token_count(c)) for c in cells_a}
        backward = {(c.i, c.j): (b.should_spawn(c), b.initial_token_count(c)) for c in cells_b}
        assert forward == backward

    def test_repeated_calls_interleaved(self):
        f = _factory()
        c1, c2 = f._board.cell_at(5, 5), f._board.cell_at(-3, 8)
        first = f.initial_token_count(c1)
        f.initial_token_count(c2)
        f.should_spawn(c2)
        assert f.initial_token_count(c1) == first

    def test_initial_count_range(self):
        f = _factory()
        counts = {f.initial_token_count(f._board.cell_at(i, 0)) for i in range(2000)}
        assert counts <= set(range(10))
        assert len(counts) == 10

    def test_spawn_rate_near_probability(self):
        f = _factory()
        cells = [f._board.cell_at(i, j) for i in range(100) for j in range(100)]
        rate = sum(1 for c in cells if f.should_spawn(c)) / len(cells)
        assert 0.08 < rate < 0.12


class TestMintTokens:
    def test_zero(self):
        f = _factory()
        assert f.mint_tokens(f._board.cell_at(1, 1), 0) == []

    def test_serials_unique_and_tagged(self):
        f = _factory()
        tokens = f.mint_tokens(f._board.cell_at(7, -1), 6)
        assert [t.serial for t in tokens] == list(range(6))
        assert all((t.i, t.j) == (7, -1) for t in tokens)


class TestScanRegion:
    def test_square_is_two_area_sizes_wide(self):
        luck = ScriptedLuck({}, default=0.0)
        f = _factory(luck, area_size=3)
        spawned = f.scan_region(f._board.cell_at(0, 0))
        assert len(spawned) == 36
        assert min(c.i for c in spawned) == -3
        assert max(c.i for c in spawned) == 2

    def test_only_spawning_cells(self):
        luck = ScriptedLuck({"10,20": 0.01, "11,19": 0.05})
        f = _factory(luck, area_size=2)
        spawned = f.scan_region(f._board.cell_at(10, 20))
        assert [(c.i, c.j) for c in spawned] == [(10, 20), (11, 19)]

    def test_cells_are_canonical(self):
        luck = ScriptedLuck({"0,0": 0.01})
        f = _factory(luck, area_size=1)
        earlier = f._board.cell_at(0, 0)
        assert f.scan_region(f._board.cell_at(0, 0))[0] is earlier

    def test_deterministic_across_factories(self):
        anchor = (369894, -1220628)
        a, b = _factory(), _factory()
        scan_a = a.scan_region(a._board.cell_at(*anchor))
        scan_b = b.scan_region(b._board.cell_at(*anchor))
        assert [(c.i, c.j) for c in scan_a] == [(c.i, c.j) for c in scan_b]
        assert scan_a
