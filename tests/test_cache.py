import math

import pytest

from tracesim.cache import (
    FLASH_LATENCY,
    PSRAM_LATENCY,
    SDRAM_LATENCY,
    SRAM_LATENCY,
    CacheResult,
    data_cache_sim,
    inst_cache_sim,
    miss_latency,
)


@pytest.mark.parametrize(
    "pc, block_size, expected",
    [
        (0x0F000000, 4, SRAM_LATENCY),
        (0x30000000, 2, FLASH_LATENCY * 2),
        (0xA0000000, 4, SDRAM_LATENCY * 4),
        (0x80000000, 1, PSRAM_LATENCY),
        (0x00001000, 8, 0),
    ],
)
def test_miss_latency(pc, block_size, expected):
    assert miss_latency(pc, block_size) == expected


def test_inst_repeated_address_hits_after_first_miss():
    pcs = [0x30000000] * 5
    result = inst_cache_sim(pcs, 4, 1, 1)
    assert result.miss == 1
    assert result.hit + result.miss == len(pcs)
    assert result.miss_penalty == FLASH_LATENCY


def test_inst_sram_is_never_cached():
    pcs = [0x0F000000] * 3
    result = inst_cache_sim(pcs, 4, 2, 1)
    assert result.miss == len(pcs)
    assert result.miss_penalty == SRAM_LATENCY * len(pcs)


def test_inst_conflict_direct_mapped_vs_two_way():
    # Same index, different tags.
    first, second = 0x80000000, 0x80000000 + (4 * 4 * 4)
    pcs = [first, second] * 4
    direct = inst_cache_sim(pcs, 4, 1, 1)
    two_way = inst_cache_sim(pcs, 4, 2, 1)
    assert direct.hit == 0
    assert two_way.miss == 2
    assert two_way.hit + two_way.miss == len(pcs)


def test_data_cache_counts_and_no_penalty():
    pcs = [0x1000, 0x1000, 0x1000]
    result = data_cache_sim(pcs, 4, 1, 1)
    assert result.miss == 1
    assert result.hit + result.miss == len(pcs)
    assert result.miss_penalty is None
    with pytest.raises(ValueError):
        result.amat()


def test_data_cache_associativity_never_hurts_repeats():
    pcs = [0x100, 0x200, 0x300, 0x100, 0x200, 0x300]
    small = data_cache_sim(pcs, 4, 1, 1)
    large = data_cache_sim(pcs, 4, 4, 1)
    assert large.hit >= small.hit


def test_reports():
    inst = inst_cache_sim([0x30000000, 0x30000000], 4, 1, 1)
    data = data_cache_sim([0x30000000, 0x30000000], 4, 1, 1)
    assert inst.report().startswith("block: 4, associativity: 1, block_size: 1\t")
    assert "AMAT:" in inst.report()
    assert "AMAT:" not in data.report()
    assert "hit rate: 0.5" in data.report()


def test_amat_all_misses_in_flash():
    result = CacheResult(4, 1, 1, hit=0, miss=2, miss_penalty=2 * FLASH_LATENCY)
    assert result.amat() == FLASH_LATENCY + 1


def test_empty_trace_rates_are_nan():
    result = inst_cache_sim([], 4, 1, 1)
    assert result.hit == 0
    assert result.miss == 0
    assert math.isnan(result.hit_rate())
    assert math.isnan(result.amat())


@pytest.mark.parametrize("geometry", [(0, 1, 1), (4, 0, 1), (4, 1, 0)])
def test_invalid_geometry(geometry):
    with pytest.raises(ValueError):
        data_cache_sim([0], *geometry)