"""Tests for the contamination screener."""

import threading
from pathlib import Path

import pytest

from readsieve.exceptions import AlignmentError, IndexBuildError
from readsieve.external.base import AlignmentHit
from readsieve.modules.contamination import ContaminationScreener


class TestBuild:
    def test_build_returns_index(self, scripted_aligner):
        aligner = scripted_aligner()
        index = ContaminationScreener(aligner).build("contam.fa")
        assert index.reference == Path("contam.fa")
        assert aligner.built == [Path("contam.fa")]

    def test_build_error_propagates(self, scripted_aligner):
        class BrokenAligner(scripted_aligner):
            def build_index(self, reference):
                raise IndexBuildError("bad reference", reference=reference)

        with pytest.raises(IndexBuildError, match="bad reference"):
            ContaminationScreener(BrokenAligner()).build("contam.fa")

    def test_missing_index_is_build_error(self, scripted_aligner):
        class NullAligner(scripted_aligner):
            def build_index(self, reference):
                return None

        with pytest.raises(IndexBuildError):
            ContaminationScreener(NullAligner()).build("contam.fa")


class TestIsContaminant:
    def test_named_hit(self, scripted_aligner):
        aligner = scripted_aligner(contaminants={"ACGT"})
        screener = ContaminationScreener(aligner)
        index = screener.build("contam.fa")
        assert screener.is_contaminant("ACGT", index) is True
        assert screener.hits == 1

    def test_no_alignment(self, scripted_aligner):
        screener = ContaminationScreener(scripted_aligner())
        index = screener.build("contam.fa")
        assert screener.is_contaminant("TTTT", index) is False
        assert screener.queries == 1
        assert screener.hits == 0

    def test_only_first_hit_is_inspected(self, scripted_aligner):
        hits = {
            "AAAA": [AlignmentHit(target_name=None), AlignmentHit(target_name="chrX")],
            "CCCC": [AlignmentHit(target_name="phiX", mapq=0), AlignmentHit(target_name=None)],
        }
        screener = ContaminationScreener(scripted_aligner(hits=hits))
        index = screener.build("contam.fa")
        assert screener.is_contaminant("AAAA", index) is False
        # Low mapping quality does not matter, only the target identity
        assert screener.is_contaminant("CCCC", index) is True

    def test_alignment_error_propagates(self, scripted_aligner):
        class FailingAligner(scripted_aligner):
            def align(self, query, index):
                raise AlignmentError("cannot map", query_length=len(query))

        screener = ContaminationScreener(FailingAligner())
        index = screener.build("contam.fa")
        with pytest.raises(AlignmentError):
            screener.is_contaminant("ACGT", index)

    def test_queries_never_overlap(self, scripted_aligner):
        active = []
        overlaps = []

        class SlowAligner(scripted_aligner):
            def align(self, query, index):
                active.append(query)
                if len(active) > 1:
                    overlaps.append(list(active))
                threading.Event().wait(0.001)
                active.remove(query)
                return []

        screener = ContaminationScreener(SlowAligner())
        index = screener.build("contam.fa")
        threads = [
            threading.Thread(target=screener.is_contaminant, args=(f"Q{i}", index))
            for i in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert overlaps == []
        assert screener.queries == 8
