"""Tests for ScanRequest and Candidate."""

from pathlib import Path

import pytest

from findkind.models import Candidate, OutputFormat, ScanRequest


class TestScanRequest:
    def test_defaults(self):
        request = ScanRequest(root=Path("."), kind="Deployment")
        assert request.group == "*"
        assert request.version == "*"
        assert request.branch_keywords == ()
        assert request.max_concurrency >= 1
        assert request.git_enabled
        assert not request.buffered

    @pytest.mark.parametrize("kind", ["", "   ", "*"])
    def test_kind_must_be_concrete(self, kind):
        with pytest.raises(ValueError):
            ScanRequest(root=Path("."), kind=kind)

    def test_max_concurrency_must_be_positive(self):
        with pytest.raises(ValueError):
            ScanRequest(root=Path("."), kind="Deployment", max_concurrency=0)

    def test_keywords_must_be_lowercase(self):
        with pytest.raises(ValueError):
            ScanRequest(root=Path("."), kind="Deployment", branch_keywords=("Foo",))

    def test_from_options_normalises_keywords(self):
        request = ScanRequest.from_options(
            root="a/./b/", kind=" Deployment ", branch_keywords=[" Foo", "", "BAR", "foo"]
        )
        assert request.branch_keywords == ("foo", "bar")
        assert request.kind == "Deployment"
        assert request.root == Path("a/b")

    def test_from_options_rejects_zero_concurrency(self):
        with pytest.raises(ValueError):
            ScanRequest.from_options(root=".", kind="Deployment", max_concurrency=0)

    def test_to_dict(self):
        request = ScanRequest(
            root=Path("src"),
            kind="Deployment",
            max_concurrency=2,
            output_format=OutputFormat.JSON_LINES,
        )
        assert request.to_dict()["outputFormat"] == "jsonl"
        assert request.to_dict()["maxConcurrency"] == 2


class TestCandidate:
    def test_file_record_is_path(self):
        assert Candidate.from_file("manifests/a.yaml").record == "manifests/a.yaml"

    def test_blob_record(self):
        candidate = Candidate.from_blob("/src/repo", "feature/foo", "deploy/a.yaml")
        assert candidate.record == "/src/repo:feature/foo:deploy/a.yaml"

    def test_repository_requires_branch(self):
        with pytest.raises(ValueError):
            Candidate(path="a.yaml", repository="/src/repo")
