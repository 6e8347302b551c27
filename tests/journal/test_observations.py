"""Tests for observation sets."""

import pytest

from ghostbook.errors import InvalidCeilingValue
from ghostbook.journal import Evidence, EvidenceState, ObservationSet


class TestObservationSet:
    def test_defaults(self):
        observation = ObservationSet()
        assert observation.ceiling == 3
        assert all(s is EvidenceState.UNKNOWN for s in observation.states.values())
        assert set(observation.states) == set(Evidence)

    def test_partial_states(self):
        observation = ObservationSet({Evidence.ORB: EvidenceState.PRESENT}, ceiling=2)
        assert observation.state(Evidence.ORB) is EvidenceState.PRESENT
        assert observation.state(Evidence.UV) is EvidenceState.UNKNOWN
        assert observation.ceiling == 2

    def test_toggle_rotation(self):
        observation = ObservationSet()
        assert observation.toggle(Evidence.EMF) is EvidenceState.PRESENT
        assert observation.toggle(Evidence.EMF) is EvidenceState.ABSENT
        assert observation.toggle(Evidence.EMF) is EvidenceState.UNKNOWN

    @pytest.mark.parametrize("start", list(EvidenceState))
    def test_three_toggles_restore_state(self, start):
        for evidence in Evidence:
            observation = ObservationSet({evidence: start})
            for _ in range(3):
                observation.toggle(evidence)
            assert observation.state(evidence) is start

    def test_toggle_only_touches_one_evidence(self):
        observation = ObservationSet()
        observation.toggle(Evidence.BOX)
        assert observation.present() == {Evidence.BOX}
        assert observation.absent() == set()

    @pytest.mark.parametrize("value", [1, 2, 3])
    def test_set_ceiling(self, value):
        observation = ObservationSet()
        observation.set_ceiling(value)
        assert observation.ceiling == value

    @pytest.mark.parametrize("value", [0, 4, -1, "2", 2.0, True, None])
    def test_set_ceiling_rejects_out_of_range(self, value):
        observation = ObservationSet()
        with pytest.raises(InvalidCeilingValue):
            observation.set_ceiling(value)
        assert observation.ceiling == 3

    def test_invalid_ceiling_is_value_error(self):
        with pytest.raises(ValueError):
            ObservationSet(ceiling=7)

    def test_copy_is_independent(self):
        observation = ObservationSet()
        clone = observation.copy()
        clone.toggle(Evidence.UV)
        clone.set_ceiling(1)
        assert observation.state(Evidence.UV) is EvidenceState.UNKNOWN
        assert observation.ceiling == 3

    def test_to_dict(self):
        observation = ObservationSet({Evidence.DOTS: EvidenceState.ABSENT}, ceiling=1)
        data = observation.to_dict()
        assert data["ceiling"] == 1
        assert data["states"]["dots"] == "absent"
        assert data["states"]["uv"] == "unknown"
