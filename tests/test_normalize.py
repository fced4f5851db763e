import pytest

from bone_automap.normalize import DEFAULT_PREFIXES, normalize_bone_name


@pytest.mark.parametrize("name, expected", [
    ("mixamorigLeftArm", "leftarm"),
    ("Hand_L", "hand_left"),
    ("Hand_R", "hand_right"),
    ("hand_left", "hand_left"),
    ("L_Hand", "left_hand"),
    ("r_foot", "right_foot"),
    ("Spine-01", "spine_01"),
    ("Upper.Arm L", "upper_arm_left"),
    ("Left", "l"),
    ("RIGHT", "r"),
    ("rig_Spine", "spine"),
    ("JNT_neck", "neck"),
    ("joint_head", "head"),
    ("bone_root", "root"),
])
def test_normalize(name, expected):
    assert normalize_bone_name(name) == expected


def test_left_right_only_replaced_as_whole_word():
    # underscore is a word character, so these stay intact
    assert normalize_bone_name("left_hand") == "left_hand"
    assert normalize_bone_name("Foot Left") == "foot_left"
    assert normalize_bone_name("leftover") == "leftover"


def test_only_one_prefix_stripped():
    assert normalize_bone_name("rig_bone_arm") == "bone_arm"


def test_prefix_alternation_prefers_first_token():
    # "mixamorig" is tried before "mixamorig_"
    assert normalize_bone_name("mixamorig_Hips") == "_hips"
    assert normalize_bone_name("mixamorig:Hips") == ":hips"


def test_prefix_only_stripped_at_start():
    assert normalize_bone_name("arm_rig_l") == "arm_rig_left"


def test_custom_prefixes():
    assert normalize_bone_name("CC_Base_Hip", prefixes=("cc_base_",)) == "hip"
    assert normalize_bone_name("rig_spine", prefixes=()) == "rig_spine"


def test_default_prefixes():
    assert DEFAULT_PREFIXES[0] == "mixamorig"
    assert {"rig_", "bone_", "jnt_", "joint_"} <= set(DEFAULT_PREFIXES)


def test_empty_name():
    assert normalize_bone_name("") == ""


@pytest.mark.parametrize("name", [
    "mixamorigLeftArm",
    "mixamorigRightHandIndex1",
    "Hand_L",
    "L_Hand",
    "jnt_l_arm",
    "thigh.R",
    "Left",
    "Spine-01",
    "upperarm_l",
    "CC_Base_L_Forearm",
])
def test_normalize_idempotent(name):
    once = normalize_bone_name(name)
    assert normalize_bone_name(once) == once
