import pytest

from tracesim.btb import ASSOCIATIVITY, BLOCK, SET
from tracesim.config import SimConfig, create_btb, create_predictor, parse_arguments
from tracesim.predictor import PHT_SIZE


def test_parse_all_options():
    config = parse_arguments(
        ["set", "16", "associativity", "2", "block", "1", "trace_file", "t.bz2", "pht", "64"]
    )
    assert config == SimConfig(
        simulator_name="", set=16, associativity=2, block=1, trace_file="t.bz2", pht_size=64
    )


def test_parse_empty_gives_defaults():
    assert parse_arguments([]) == SimConfig()


def test_simulator_name_swallows_next_word():
    config = parse_arguments(["bimode", "extra", "pht", "8"])
    assert config.simulator_name == "bimode"
    assert config.pht_size == 8
    assert config.trace_file == ""


def test_missing_value_raises():
    with pytest.raises(ValueError):
        parse_arguments(["set"])


def test_non_integer_value_raises():
    with pytest.raises(ValueError):
        parse_arguments(["pht", "many"])


def test_create_predictor_default_and_sized():
    assert create_predictor(SimConfig()).pht_size == PHT_SIZE
    sized = create_predictor(SimConfig(pht_size=64))
    assert sized.pht_size == 64
    assert len(sized.pht) == 64


def test_create_btb_default_geometry():
    btb = create_btb(SimConfig())
    assert (btb.block, btb.associativity, btb.set) == (BLOCK, ASSOCIATIVITY, SET)


def test_create_btb_custom_geometry():
    btb = create_btb(SimConfig(set=8, associativity=2, block=1))
    assert len(btb.table) == 8
    assert len(btb.table[0]) == 2


def test_create_btb_requires_associativity_and_block():
    with pytest.raises(ValueError, match="Associativity and block size"):
        create_btb(SimConfig(set=8))
    with pytest.raises(ValueError):
        create_btb(SimConfig(set=8, associativity=2))