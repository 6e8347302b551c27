"""Tests for the evidence catalog."""

import pytest

from ghostbook.journal import EVIDENCE_LABELS, GHOSTS, MAX_EVIDENCES, Evidence, GhostDefinition
from ghostbook.journal.catalog import get_ghost


class TestEvidence:
    def test_ids(self):
        assert [e.value for e in Evidence] == [
            "dots", "emf", "freezing", "orb", "writing", "box", "uv",
        ]

    def test_every_evidence_has_label(self):
        assert set(EVIDENCE_LABELS) == set(Evidence)
        assert EVIDENCE_LABELS[Evidence.DOTS] == "D.O.T.S Projector"


class TestGhosts:
    def test_catalog_size_and_order(self):
        names = [ghost.name for ghost in GHOSTS]
        assert len(names) == 24
        assert names[0] == "Spirit"
        assert names[-1] == "Thaye"
        assert len(set(names)) == len(names)

    def test_every_ghost_has_three_evidences(self):
        for ghost in GHOSTS:
            assert len(ghost.evidences) == MAX_EVIDENCES

    def test_markers(self):
        guaranteed = {g.name: g.guaranteed for g in GHOSTS if g.guaranteed}
        assert guaranteed == {
            "Hantu": Evidence.FREEZING,
            "Goryo": Evidence.DOTS,
            "Obake": Evidence.UV,
            "Moroi": Evidence.BOX,
            "Deogen": Evidence.BOX,
        }
        fakes = {g.name: g.fake for g in GHOSTS if g.fake}
        assert fakes == {"The Mimic": Evidence.ORB}

    def test_mimic_fake_is_not_a_real_evidence(self):
        mimic = get_ghost("The Mimic")
        assert mimic is not None
        assert mimic.fake not in mimic.evidences

    def test_get_ghost_case_insensitive(self):
        assert get_ghost("hantu") is get_ghost("Hantu")
        assert get_ghost("Casper") is None

    def test_definition_is_immutable(self):
        with pytest.raises(AttributeError):
            GHOSTS[0].name = "Other"  # type: ignore[misc]


class TestGhostDefinition:
    def test_rejects_wrong_evidence_count(self):
        with pytest.raises(ValueError, match="exactly 3"):
            GhostDefinition("Bad", frozenset({Evidence.EMF, Evidence.UV}))

    def test_rejects_foreign_guaranteed(self):
        with pytest.raises(ValueError, match="Guaranteed"):
            GhostDefinition(
                "Bad",
                frozenset({Evidence.EMF, Evidence.UV, Evidence.ORB}),
                guaranteed=Evidence.BOX,
            )
