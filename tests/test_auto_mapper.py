import numpy as np
import pytest

from bone_automap import BoneMetadata
from bone_automap.mapper import ACCEPTANCE_THRESHOLD, AutoMapper, BaseMapper, MixamoMapper, auto_map
from bone_automap.normalize import normalize_bone_name
from bone_automap.similarity import similarity_score


CANONICAL_BONES = [
    "pelvis", "spine_01", "spine_02", "spine_03", "neck_01", "head",
    "clavicle_l", "upperarm_l", "lowerarm_l", "hand_l",
    "clavicle_r", "upperarm_r", "lowerarm_r", "hand_r",
    "thigh_l", "calf_l", "foot_l", "thigh_r", "calf_r", "foot_r",
]

GENERIC_BONES = [
    "Root", "Pelvis", "Spine-01", "Spine-02", "Neck", "Head",
    "Clavicle.L", "UpperArm.L", "LowerArm.L", "Hand.L",
    "Clavicle.R", "UpperArm.R", "LowerArm.R", "Hand.R",
    "Thigh.L", "Calf.L", "Foot.L", "Thigh.R", "Calf.R", "Foot.R",
    "Tail_01",
]


def test_side_suffixes_map_to_matching_side():
    mapping = auto_map(["Hand_L", "Hand_R"], ["hand_left", "hand_right"])
    assert mapping == {"hand_left": "Hand_L", "hand_right": "Hand_R"}


def test_dissimilar_names_stay_unmapped():
    assert auto_map(["Foot"], ["Elbow"]) == {}


def test_empty_inputs():
    assert auto_map([], ["Hips"]) == {}
    assert auto_map(["Hips"], []) == {}


def test_generic_rig():
    mapping = auto_map(CANONICAL_BONES, GENERIC_BONES)

    assert mapping["Pelvis"] == "pelvis"
    assert mapping["Spine-01"] == "spine_01"
    assert mapping["Hand.L"] == "hand_l"
    assert mapping["Hand.R"] == "hand_r"
    assert mapping["UpperArm.L"] == "upperarm_l"
    assert mapping["Calf.R"] == "calf_r"
    assert "Root" not in mapping


def test_threshold_enforced():
    mapping = auto_map(CANONICAL_BONES, GENERIC_BONES)
    for target, source in mapping.items():
        score = similarity_score(normalize_bone_name(target), normalize_bone_name(source))
        assert score >= ACCEPTANCE_THRESHOLD


def test_mapping_is_sound():
    mapping = auto_map(CANONICAL_BONES, GENERIC_BONES)
    assert set(mapping) <= set(GENERIC_BONES)
    assert set(mapping.values()) <= set(CANONICAL_BONES)


def test_deterministic():
    first = auto_map(CANONICAL_BONES, GENERIC_BONES)
    second = auto_map(CANONICAL_BONES, GENERIC_BONES)
    assert list(first.items()) == list(second.items())


def test_inputs_not_mutated():
    sources = list(CANONICAL_BONES)
    targets = list(GENERIC_BONES)
    auto_map(sources, targets)
    assert sources == CANONICAL_BONES
    assert targets == GENERIC_BONES


def test_tie_keeps_first_source():
    assert auto_map(["spine_a", "spine_b"], ["spine"]) == {"spine": "spine_a"}
    assert auto_map(["spine_b", "spine_a"], ["spine"]) == {"spine": "spine_b"}


def test_duplicate_sources_resolve_to_first():
    assert auto_map(["Head", "Head"], ["head"]) == {"head": "Head"}


def test_custom_threshold():
    assert auto_map(["spine"], ["spline"]) == {"spline": "spine"}
    assert auto_map(["spine"], ["spline"], threshold=0.9) == {}


def test_find_best_match_reports_score():
    mapper = AutoMapper()
    match = mapper.find_best_match("Spine-01", ["pelvis", "spine_01"])
    assert match.source == "spine_01"
    assert match.score == 1.0
    assert match.method == "auto"
    assert mapper.find_best_match("Elbow", ["Foot"]) is None


def test_accepts_bone_objects():
    mapper = AutoMapper()
    mapping = mapper.map_bones(
        [BoneMetadata("Hand_L"), {"name": "Hand_R"}],
        [BoneMetadata("hand_left"), "hand_right"],
    )
    assert mapping == {"hand_left": "Hand_L", "hand_right": "Hand_R"}


def test_score_matrix():
    mapper = AutoMapper()
    scores = mapper.score_matrix(["Hand_L", "Foot"], ["hand_left", "Elbow", "foot"])
    assert scores.shape == (3, 2)
    assert scores[0, 0] == 1.0
    assert scores[2, 1] == 1.0
    assert np.all((scores >= 0.0) & (scores <= 1.0))


def test_exclusive_assignment_uses_each_source_once():
    shared = AutoMapper()
    assert shared.map_bones(["Spine"], ["spine", "spine1"]) == {"spine": "Spine", "spine1": "Spine"}

    exclusive = AutoMapper({'automap': {'exclusive': True}})
    assert exclusive.map_bones(["Spine"], ["spine", "spine1"]) == {"spine": "Spine"}


def test_exclusive_assignment_drops_low_scores():
    mapper = AutoMapper({'automap': {'exclusive': True}})
    assert mapper.map_bones(["Foot", "Hand_L"], ["Elbow", "hand_left"]) == {"hand_left": "Hand_L"}
    assert mapper.map_bones([], ["Elbow"]) == {}


def test_stats():
    mapper = AutoMapper()
    mapper.map_bones(["Hand_L", "Hand_R"], ["hand_left", "hand_right", "Tail"])
    assert mapper.stats.calls == 1
    assert mapper.stats.targets == 3
    assert mapper.stats.mapped == 2
    assert mapper.stats.unmapped == 1
    assert mapper.get_stats()["unmapped"] == 1

    mapper.reset_stats()
    assert mapper.get_stats()["calls"] == 0


@pytest.mark.parametrize("config", [
    {'automap': {'threshold': 1.5}},
    {'automap': {'threshold': -0.1}},
    {'automap': {'prefixes': "rig_"}},
])
def test_invalid_config(config):
    with pytest.raises(ValueError):
        AutoMapper(config)


def test_from_config():
    assert isinstance(BaseMapper.from_config({}), AutoMapper)
    assert isinstance(BaseMapper.from_config({'mapper': {'type': 'MixamoMapper'}}), MixamoMapper)
    with pytest.raises(ValueError):
        BaseMapper.from_config({'mapper': {'type': 'NoSuchMapper'}})


def test_from_yaml(tmp_path):
    config_path = tmp_path / "mapper.yaml"
    config_path.write_text("mapper:\n  type: AutoMapper\nautomap:\n  threshold: 0.9\n")

    mapper = BaseMapper.from_yaml(str(config_path))
    assert isinstance(mapper, AutoMapper)
    assert mapper.threshold == 0.9
    assert mapper.map_bones(["spine"], ["spline"]) == {}
