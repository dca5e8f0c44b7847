from __future__ import annotations

import itertools

import pytest

from jszipper.filtering import (
    ArtifactFilterError,
    FilterArtifacts,
    ProjectTransitivityFilter,
    ScopeFilter,
    TypeFilter,
)

from tests.utils import make_artifact


@pytest.fixture()
def artifacts():
    return [
        make_artifact("direct-runtime-jszip"),
        make_artifact("direct-compile-jszip", scope="compile"),
        make_artifact("direct-runtime-jar", type="jar"),
        make_artifact("transitive-runtime-jszip"),
        make_artifact("direct-test-jszip", scope="test"),
        make_artifact("direct-runtime-jszip-min", classifier="min"),
    ]


@pytest.fixture()
def direct(artifacts):
    return [a for a in artifacts if not a.artifact_id.startswith("transitive")]


def test_transitivity_filter_keeps_direct_dependencies(artifacts, direct) -> None:
    kept = ProjectTransitivityFilter(direct).filter(artifacts)
    assert kept == direct


def test_transitivity_filter_matches_other_versions_of_direct_dependency(direct) -> None:
    newer = make_artifact("direct-runtime-jszip", version="9.9")
    assert ProjectTransitivityFilter(direct).is_artifact_included(newer)


def test_transitivity_filter_disabled_passes_everything(artifacts) -> None:
    kept = ProjectTransitivityFilter([], exclude_transitive=False).filter(artifacts)
    assert kept == artifacts


def test_scope_filter_is_exact_match(artifacts) -> None:
    kept = ScopeFilter("runtime").filter(artifacts)
    assert {a.scope for a in kept} == {"runtime"}
    assert len(kept) == 4


def test_scope_filter_exclude_scope(artifacts) -> None:
    kept = ScopeFilter("", "runtime").filter(artifacts)
    assert {a.artifact_id for a in kept} == {"direct-compile-jszip", "direct-test-jszip"}


@pytest.mark.parametrize(("include", "exclude"), [("runtim", ""), ("", "bogus"), ("test", "test")])
def test_scope_filter_rejects_malformed_configuration(artifacts, include, exclude) -> None:
    with pytest.raises(ArtifactFilterError):
        ScopeFilter(include, exclude).filter(artifacts)


def test_type_filter_include_and_exclude_lists(artifacts) -> None:
    assert all(a.type == "jszip" for a in TypeFilter("jszip").filter(artifacts))
    assert [a.type for a in TypeFilter("jszip, jar", "jszip").filter(artifacts)] == ["jar"]
    assert TypeFilter("").filter(artifacts) == artifacts


def test_chain_is_intersection_regardless_of_order(artifacts, direct) -> None:
    filters = [ProjectTransitivityFilter(direct), ScopeFilter("runtime"), TypeFilter("jszip")]
    expected = [
        a
        for a in artifacts
        if a in direct and a.scope == "runtime" and a.type == "jszip"
    ]
    assert [a.artifact_id for a in expected] == ["direct-runtime-jszip", "direct-runtime-jszip-min"]

    for ordering in itertools.permutations(filters):
        chain = FilterArtifacts()
        for artifact_filter in ordering:
            chain.add_filter(artifact_filter)
        assert chain.filter(artifacts) == expected


def test_empty_chain_returns_input(artifacts) -> None:
    assert FilterArtifacts().filter(artifacts) == artifacts
