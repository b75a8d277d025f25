"""Tests for derived stat formulas: verification with known inputs."""

import pytest

from gurps_sheet.models.character import Character
from gurps_sheet.models.derived_stats import (
    DamageDice,
    basic_lift,
    basic_move,
    basic_speed,
    block,
    compute_stats,
    damage,
    parry,
    secondary_defaults,
)
from gurps_sheet.models.encumbrance import LIGHT, NONE


# --- Basic Lift ---

def test_lift_st_10():
    """ST 10: floor(100 / 5) = 20."""
    assert basic_lift(10) == 20


def test_lift_st_13():
    """ST 13: floor(169 / 5) = 33."""
    assert basic_lift(13) == 33


def test_lift_st_0_does_not_crash():
    assert basic_lift(0) == 0


def test_lift_monotonic():
    lifts = [basic_lift(st) for st in range(0, 201)]
    assert lifts == sorted(lifts)


# --- Basic Speed / Move ---

def test_speed_10_10():
    """(10 + 10) / 4 = 5.0."""
    assert basic_speed(10, 10) == pytest.approx(5.0)


def test_speed_12_13():
    """(12 + 13) / 4 = 6.25."""
    assert basic_speed(12, 13) == pytest.approx(6.25)


def test_speed_11_12():
    """(11 + 12) / 4 = 5.75."""
    assert basic_speed(11, 12) == pytest.approx(5.75)


def test_speed_always_quarter_multiple():
    for dx in range(1, 25):
        for ht in range(1, 25):
            assert (basic_speed(dx, ht) * 4).is_integer()


def test_move_drops_fraction():
    """DX 12, HT 13: speed 6.25 -> move 6."""
    assert basic_move(12, 13) == 6


# --- Damage ---

def test_damage_st_10():
    """ST 10: thrust 1d, 10%6=4 -> +1; swing 3d, 10%3=1 -> +1."""
    assert damage(10) == DamageDice(thrust="1d+1", swing="3d+1")


def test_damage_st_12():
    """ST 12: thrust 2d, 12%6=0 -> -1; swing 4d, 12%3=0 -> none."""
    assert damage(12) == DamageDice(thrust="2d-1", swing="4d")


def test_damage_st_7():
    """ST 7: thrust 1d, 7%6=1 -> none; swing 2d, 7%3=1 -> +1."""
    assert damage(7) == DamageDice(thrust="1d", swing="2d+1")


def test_damage_st_8():
    """ST 8: swing 2d, 8%3=2 -> +2."""
    assert damage(8).swing == "2d+2"


def test_damage_low_st_keeps_one_die():
    """ST 2: dice counts floor at 1."""
    dice = damage(2)
    assert dice.thrust == "1d"
    assert dice.swing == "1d+2"


def test_damage_st_0():
    assert damage(0) == DamageDice(thrust="1d-1", swing="1d")


# --- Secondary defaults ---

def test_secondary_defaults():
    defaults = secondary_defaults(st=14, dx=12, iq=11, ht=13)
    assert defaults.hp == 14
    assert defaults.will == 11
    assert defaults.per == 11
    assert defaults.fp == 13
    assert defaults.basic_speed == pytest.approx(6.25)
    assert defaults.basic_move == 6


def test_secondary_defaults_get_by_name():
    defaults = secondary_defaults(10, 10, 10, 10)
    assert defaults.get("basic_move") == 5


# --- Parry / Block ---

def test_parry_dx_10():
    """floor(10 / 2) + 3 = 8."""
    assert parry(10) == 8


def test_parry_dx_13_with_modifier():
    """floor(13 / 2) + 3 + 1 = 10."""
    assert parry(13, 1) == 10


def test_block_base():
    assert block() == 10
    assert block(2) == 12


# --- compute_stats ---

def test_compute_stats_default_character():
    stats = compute_stats(Character())
    assert stats.basic_lift == 20
    assert stats.encumbrance is NONE
    assert stats.dodge == 8
    assert stats.parry == 8
    assert stats.block == 10
    assert stats.move == 5


def test_compute_stats_light_load():
    """25 lbs on 20 lift is Light: dodge 8-1, move floor(5*0.8)=4."""
    stats = compute_stats(Character(current_weight=25.0))
    assert stats.encumbrance is LIGHT
    assert stats.dodge == 7
    assert stats.move == 4
