import pytest
from scenario_expander import ExpanderConfig, ExpansionPipeline, RunMode
from scenario_expander.core import (
    FeatureParseError,
    InputError,
    InvariantViolationError,
    OutputError,
)


RAGGED_FEATURE = """\
Feature: Ragged

  @automated
  Scenario Outline: Mixed widths
    When I use <user>

    Examples:
      | user  |
      | alice |

    Examples:
      | user | role  |
      | bob  | admin |
"""

THREE_SCENARIOS = """\
Feature: Three

  @automated
  Scenario: one
    Given a

  @automated
  Scenario Outline: more
    Given <x>

    Examples:
      | x |
      | b |
      | c |
"""


class TestExpansionPipeline:
    """Test the end-to-end pipeline"""

    @pytest.fixture
    def config(self, features_dir, tmp_path):
        return ExpanderConfig(
            input_dir=features_dir,
            output_dir=tmp_path / "expanded",
            selection_tag="automated",
            mode=RunMode.MATERIALIZE,
        )

    def test_materialize_end_to_end(self, config, write_feature, login_feature):
        """Background and example rows end up in one file per scenario"""
        write_feature("login.feature", login_feature)

        result = ExpansionPipeline(config).run()

        assert result.mode == RunMode.MATERIALIZE
        assert [p.name for p in result.files] == ["0.feature", "1.feature"]
        assert (config.output_dir / "0.feature").read_text() == (
            "Feature: Login\n"
            "\n"
            "  @automated\n"
            "  Scenario: Use an account\n"
            "    Given base\n"
            "    When I use alice\n"
        )
        second = (config.output_dir / "1.feature").read_text()
        assert "    Given base\n    When I use bob\n" in second
        assert "Background" not in second

    def test_count(self, config, write_feature, login_feature):
        write_feature("login.feature", login_feature)
        config.mode = RunMode.COUNT

        result = ExpansionPipeline(config).run()

        assert result.scenarios == 2
        assert result.documents == 1
        assert result.files == []
        assert not config.output_dir.exists()

    def test_count_unparameterized_scenarios(self, config, write_feature, login_feature):
        write_feature("login.feature", login_feature)
        config.selection_tag = "manual"

        assert ExpansionPipeline(config).count().scenarios == 1

    def test_index_runs_across_documents(self, config, write_feature, login_feature):
        """Files are numbered across documents in file name order"""
        write_feature("b.feature", THREE_SCENARIOS)
        write_feature("a.feature", login_feature)

        result = ExpansionPipeline(config).materialize()

        assert len(result.files) == 5
        contents = [p.read_text() for p in result.files]
        assert contents[0].startswith("Feature: Login")
        assert contents[2].startswith("Feature: Three")
        assert "Given c" in contents[4]

    def test_split_keeps_feature_title(self, config, write_feature):
        write_feature("three.feature", THREE_SCENARIOS)

        result = ExpansionPipeline(config).materialize()

        assert len(result.files) == 3
        for path in result.files:
            text = path.read_text()
            assert text.startswith("Feature: Three\n")
            assert text.count("Scenario:") == 1

    def test_features_without_match_are_skipped(self, config, write_feature, login_feature):
        write_feature("login.feature", login_feature)
        config.selection_tag = "nothing"

        result = ExpansionPipeline(config).materialize()

        assert result.files == []
        assert config.output_dir.is_dir()

    def test_output_dir_is_reused(self, config, write_feature, login_feature):
        write_feature("login.feature", login_feature)
        config.output_dir.mkdir()

        assert len(ExpansionPipeline(config).materialize().files) == 2

    def test_stale_numbered_files_are_removed(self, config, write_feature, login_feature):
        """A smaller run leaves no files from a larger earlier one"""
        write_feature("login.feature", login_feature)
        config.output_dir.mkdir()
        (config.output_dir / "5.feature").write_text("Feature: Old\n")
        (config.output_dir / "notes.txt").write_text("keep me")
        (config.output_dir / "login.feature").write_text("Feature: Mine\n")

        ExpansionPipeline(config).materialize()

        assert sorted(p.name for p in config.output_dir.iterdir()) == [
            "0.feature", "1.feature", "login.feature", "notes.txt"
        ]

    def test_ragged_examples_are_fatal(self, config, write_feature):
        write_feature("ragged.feature", RAGGED_FEATURE)

        with pytest.raises(InvariantViolationError):
            ExpansionPipeline(config).run()
        assert not config.output_dir.exists()

    def test_parse_error_is_fatal(self, config, write_feature, login_feature):
        write_feature("a.feature", login_feature)
        write_feature("b.feature", "not gherkin at all\n")

        with pytest.raises(FeatureParseError):
            ExpansionPipeline(config).run()
        assert not config.output_dir.exists()

    def test_missing_input_dir(self, config, tmp_path):
        config.input_dir = tmp_path / "nowhere"

        with pytest.raises(InputError):
            ExpansionPipeline(config).run()

    def test_subdirectory_is_fatal(self, config, features_dir):
        (features_dir / "nested").mkdir()

        with pytest.raises(InputError):
            ExpansionPipeline(config).count()

    def test_output_dir_blocked_by_file(self, config, write_feature, login_feature):
        write_feature("login.feature", login_feature)
        config.output_dir.write_text("in the way")

        with pytest.raises(OutputError):
            ExpansionPipeline(config).materialize()
