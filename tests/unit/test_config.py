"""Tests for profile configuration and registry loading."""

import pytest
from pydantic import ValidationError

from tabledoc import Cardinality, CycleDetectedError, InvalidReferenceError
from tabledoc.config import Config, ProfileConfig, RelationConfig
from tabledoc.core.loader import build_registry, load_profile


PROFILE = """
root = "sheet1"

[tables.sheet1]
path = "sheet1.csv"

[tables.sheet2]
path = "sheet2.csv"

[[relations]]
parent = "sheet1"
child = "sheet2"
output_key = "Join1"
cardinality = "array"
on = ["Code=MainCode"]

[output]
indent = 2
"""


@pytest.fixture
def profile_dir(tmp_path):
    """Directory holding two CSV sheets and a profile joining them."""
    (tmp_path / "sheet1.csv").write_text("Code,Title\nA,first\nB,second\n")
    (tmp_path / "sheet2.csv").write_text("MainCode,Value\nA,1\nA,2\nC,3\n")
    (tmp_path / "profile.toml").write_text(PROFILE)
    return tmp_path


class TestConfig:
    """Test loading profile files."""

    def test_load(self, profile_dir):
        profile = Config(profile_dir / "profile.toml").load()

        assert profile.root == "sheet1"
        assert set(profile.tables) == {"sheet1", "sheet2"}
        assert profile.relations[0].cardinality == Cardinality.ARRAY
        assert profile.relations[0].join_pairs() == [("Code", "MainCode")]
        assert profile.output.indent == 2
        assert profile.cycle_check == "full"

    def test_missing_file(self, tmp_path):
        config = Config(tmp_path / "profile.toml")

        assert not config.exists
        with pytest.raises(FileNotFoundError):
            config.load()

    def test_env_overrides(self, profile_dir, monkeypatch):
        monkeypatch.setenv("TABLEDOC_ROOT", "sheet2")
        monkeypatch.setenv("TABLEDOC_INDENT", "4")
        monkeypatch.setenv("TABLEDOC_ENSURE_ASCII", "true")

        profile = Config(profile_dir / "profile.toml").load()

        assert profile.root == "sheet2"
        assert profile.output.indent == 4
        assert profile.output.ensure_ascii is True

    def test_unknown_keys_rejected(self, tmp_path):
        path = tmp_path / "profile.toml"
        path.write_text('root = "a"\nbogus = 1\n')

        with pytest.raises(ValidationError):
            Config(path).load()

    def test_bad_join_pair(self):
        with pytest.raises(ValidationError):
            RelationConfig(parent="a", child="b", output_key="b", on=["Code"])

    def test_join_pairs_are_stripped(self):
        relation = RelationConfig(
            parent="a", child="b", output_key="b", on=[" Code = MainCode "]
        )

        assert relation.join_pairs() == [("Code", "MainCode")]


class TestBuildRegistry:
    """Test wiring a registry from a profile."""

    def test_load_profile(self, profile_dir):
        profile, registry = load_profile(profile_dir / "profile.toml")

        documents = registry.resolve(registry.get_table(profile.root))

        assert documents == [
            {
                "Code": "A",
                "Title": "first",
                "Join1": [
                    {"MainCode": "A", "Value": "1"},
                    {"MainCode": "A", "Value": "2"},
                ],
            },
            {"Code": "B", "Title": "second", "Join1": []},
        ]

    def test_unknown_table(self, profile_dir):
        profile = ProfileConfig(
            tables={"sheet1": {"path": "sheet1.csv"}},
            relations=[{"parent": "sheet1", "child": "nope", "output_key": "x"}],
        )

        with pytest.raises(InvalidReferenceError):
            build_registry(profile, profile_dir)

    def test_unknown_column(self, profile_dir):
        profile = ProfileConfig(
            tables={
                "sheet1": {"path": "sheet1.csv"},
                "sheet2": {"path": "sheet2.csv"},
            },
            relations=[
                {
                    "parent": "sheet1",
                    "child": "sheet2",
                    "output_key": "x",
                    "on": ["Code=Missing"],
                }
            ],
        )

        with pytest.raises(InvalidReferenceError):
            build_registry(profile, profile_dir)

    def test_cycle_in_profile(self, profile_dir):
        profile = ProfileConfig(
            tables={
                "sheet1": {"path": "sheet1.csv"},
                "sheet2": {"path": "sheet2.csv"},
            },
            relations=[
                {"parent": "sheet1", "child": "sheet2", "output_key": "a", "on": ["Code=MainCode"]},
                {"parent": "sheet2", "child": "sheet1", "output_key": "b", "on": ["MainCode=Code"]},
            ],
        )

        with pytest.raises(CycleDetectedError):
            build_registry(profile, profile_dir)
