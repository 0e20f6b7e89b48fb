"""
Tests for die faces, dice and dice sets.
"""

import random

import pytest

from dicetactician.core.constants import FaceKind
from dicetactician.dice.dice import DiceSet, Die, DieFace, reset_all, roll


@pytest.fixture
def die():
    return Die(
        faces=[
            DieFace(kind=FaceKind.ATTACK, value=8),
            DieFace(kind=FaceKind.DEFENSE, value=5),
            DieFace(kind=FaceKind.CRIT),
            DieFace(kind=FaceKind.SPECIAL, symbol="flame"),
        ]
    )


@pytest.fixture
def dice_set(die):
    return DiceSet(
        class_name="Pyromantic",
        dice=[die, die.model_copy(deep=True, update={"id": "die_b"}), Die(faces=list(die.faces))],
    )


def test_roll_selects_a_face_of_the_die(die):
    """
    Test that rolling marks the die as rolled and shows one of its faces.
    """
    rng = random.Random(3)
    for _ in range(20):
        face = roll(die, rng)
        assert die.is_rolled
        assert face in die.faces
        assert die.current_face == face


def test_roll_visits_every_face(die):
    """
    Test that a uniform roll eventually shows every face.
    """
    rng = random.Random(11)
    seen = {roll(die, rng) for _ in range(200)}
    assert seen == set(die.faces)


def test_reset_all_clears_rolled_state(dice_set):
    """
    Test that reset_all clears the rolled state of every die.
    """
    dice_set.roll_all(random.Random(1))
    assert all(d.is_rolled for d in dice_set.dice)
    reset_all(dice_set)
    assert not any(d.is_rolled for d in dice_set.dice)
    assert all(d.current_face is None for d in dice_set.dice)


def test_die_ids_are_unique_and_stable(dice_set):
    """
    Test that every die keeps its id across rolls.
    """
    ids = [d.id for d in dice_set.dice]
    assert len(set(ids)) == 3
    dice_set.roll_all(random.Random(2))
    assert [d.id for d in dice_set.dice] == ids
    assert dice_set.get_die(ids[1]) is dice_set.dice[1]
    assert dice_set.get_die("missing") is None


def test_die_requires_four_to_eight_faces():
    """
    Test that a die with too few faces is rejected.
    """
    with pytest.raises(ValueError):
        Die(faces=[DieFace(kind=FaceKind.CRIT)] * 3)


def test_face_validation():
    """
    Test that special faces need a symbol and other faces must not carry one.
    """
    with pytest.raises(ValueError):
        DieFace(kind=FaceKind.SPECIAL)
    with pytest.raises(ValueError):
        DieFace(kind=FaceKind.ATTACK, value=3, symbol="flame")
    with pytest.raises(ValueError):
        DieFace(kind=FaceKind.DEFENSE, value=-1)


def test_crit_and_magic_faces_carry_no_value():
    assert DieFace(kind=FaceKind.CRIT).value == 0
    assert not DieFace(kind=FaceKind.MAGIC).is_numeric
    assert DieFace(kind=FaceKind.ATTACK, value=4).is_numeric


def test_highest_and_special_faces(die):
    assert die.highest_face() == DieFace(kind=FaceKind.ATTACK, value=8)
    assert die.special_faces() == [DieFace(kind=FaceKind.SPECIAL, symbol="flame")]


def test_replace_face(dice_set):
    """
    Test that replace_face swaps a single face and ignores bad indices.
    """
    upgraded = DieFace(kind=FaceKind.ATTACK, value=10)
    assert dice_set.replace_face(2, 0, upgraded)
    assert dice_set.dice[2].faces[0] == upgraded
    assert not dice_set.replace_face(5, 0, upgraded)
    assert not dice_set.replace_face(0, 9, upgraded)
