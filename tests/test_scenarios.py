import pytest
import sys
from pathlib import Path

from click.testing import CliRunner

sys.path.insert(0, str(Path(__file__).parent.parent))

from homeharness.cli import main
from homeharness.config import HarnessConfig
from homeharness.errors import ConfigurationError, VerificationFailure
from homeharness.retry import RetryExecutor
from homeharness.robots import home_screen
from homeharness.runner import ScenarioOutcome, ScenarioResult, run_scenario
from homeharness.scenarios import Scenario, load_scenarios
from homeharness.session import open_session

FAST = HarnessConfig(attempts=1, wait_timeout_ms=2000, poll_interval_ms=10)

registry = load_scenarios()
ACTIVE = [s for s in registry.all() if not s.skipped]
DEFERRED = [s for s in registry.all() if s.skipped]


def run_once(item, config=FAST):
    RetryExecutor(1).execute(item.body, lambda: open_session(config, item.resolve_settings()), name=item.name)


class TestRegistry:
    def test_all_home_screen_scenarios_registered(self):
        assert set(registry.names()) == {
            "home_screen_items",
            "private_browsing_home_screen_items",
            "jump_back_in_section",
            "jump_back_in_contextual_hint",
            "pocket_section",
            "open_pocket_story_item",
            "pocket_discover_more_button",
            "select_pocket_stories_by_topic",
            "pocket_learn_more_button",
            "customize_homepage_button",
            "pocket_section_reenabled",
        }

    def test_deferred_scenarios(self):
        assert {s.name for s in DEFERRED} == {
            "home_screen_items",
            "pocket_section",
            "open_pocket_story_item",
            "select_pocket_stories_by_topic",
        }
        assert all("1844580" in s.skip_reason for s in DEFERRED)

    def test_settings_are_valid(self):
        for item in registry.all():
            item.resolve_settings()

    def test_duplicate_name_rejected(self):
        with pytest.raises(ValueError):
            registry.register(Scenario(name="jump_back_in_section", body=lambda s: None))

    def test_unknown_scenario(self):
        with pytest.raises(KeyError):
            registry.get("nope")


class TestScenarioBodies:
    @pytest.mark.parametrize("item", ACTIVE, ids=lambda s: s.name)
    def test_active_scenario_passes(self, item):
        run_once(item)

    @pytest.mark.parametrize("item", DEFERRED, ids=lambda s: s.name)
    def test_deferred_scenario_body_runs_on_simulated_app(self, item):
        run_once(item)

    def test_jump_back_in_with_ui_latency(self):
        config = HarnessConfig(attempts=1, wait_timeout_ms=3000, poll_interval_ms=10, ui_latency_ms=20)
        run_once(registry.get("jump_back_in_section"), config)


class TestRunner:
    def test_passing_scenario(self):
        result = run_scenario(registry.get("private_browsing_home_screen_items"), FAST)
        assert result.outcome is ScenarioOutcome.PASSED
        assert result.attempts == 1
        assert result.error is None

    def test_skipped_scenario_never_attempted(self):
        calls = []
        item = Scenario(name="deferred", body=calls.append, skip_reason="known defect")
        result = run_scenario(item, FAST)
        assert result.outcome is ScenarioOutcome.SKIPPED
        assert result.skip_reason == "known defect"
        assert result.attempts == 0
        assert calls == []

    def test_failing_scenario_uses_budget(self):
        item = Scenario(
            name="missing_top_site",
            body=lambda session: home_screen(session).verify_existing_top_sites_tabs("Nope"),
            attempts=2,
        )
        result = run_scenario(item, HarnessConfig(attempts=5, wait_timeout_ms=100, poll_interval_ms=10))
        assert result.outcome is ScenarioOutcome.FAILED
        assert result.attempts == 2
        assert result.error_type == "VerificationFailure"
        assert "Nope" in result.error

    def test_flaky_scenario_gets_fresh_session(self):
        sessions = []

        def body(session):
            sessions.append(session)
            if len(sessions) == 1:
                raise VerificationFailure("flaky first attempt")
            home_screen(session).verify_home_wordmark()

        on_retry = []
        result = run_scenario(Scenario(name="flaky", body=body), FAST, on_retry=lambda n, e: on_retry.append(n))
        assert result.outcome is ScenarioOutcome.PASSED
        assert result.attempts == 2
        assert on_retry == [1]
        assert sessions[0] is not sessions[1]
        assert sessions[0].device is not sessions[1].device
        assert not sessions[0].origin.is_running

    def test_explicit_zero_attempts_rejected(self):
        calls = []
        result = run_scenario(Scenario(name="no_budget", body=calls.append, attempts=0), FAST)
        assert result.outcome is ScenarioOutcome.FAILED
        assert result.error_type == ConfigurationError.__name__
        assert result.attempts == 0
        assert calls == []

    def test_invalid_settings_not_attempted(self):
        calls = []
        item = Scenario(name="bad", body=calls.append, settings={"is_pocket_enabled": "no"})
        result = run_scenario(item, FAST)
        assert result.outcome is ScenarioOutcome.FAILED
        assert result.error_type == ConfigurationError.__name__
        assert result.attempts == 0
        assert calls == []

    def test_harness_error_not_retried(self):
        calls = []

        def body(session):
            calls.append(session)
            raise RuntimeError("harness bug")

        result = run_scenario(Scenario(name="bug", body=body), HarnessConfig(attempts=3))
        assert result.outcome is ScenarioOutcome.FAILED
        assert result.attempts == 1
        assert len(calls) == 1

    def test_result_to_dict(self):
        d = ScenarioResult(name="x", outcome=ScenarioOutcome.SKIPPED, skip_reason="later").to_dict()
        assert d["outcome"] == "skipped"
        assert d["skip_reason"] == "later"
        assert d["attempts"] == 0


class TestCli:
    @pytest.fixture(autouse=True)
    def keep_test_logging(self, monkeypatch):
        monkeypatch.setattr("homeharness.cli.setup_logging", lambda **kwargs: None)

    def test_scenarios(self):
        result = CliRunner().invoke(main, ["scenarios"])
        assert result.exit_code == 0
        assert "Registered scenarios" in result.output

    def test_graph(self):
        result = CliRunner().invoke(main, ["graph"])
        assert result.exit_code == 0
        assert "Screen graph" in result.output

    def test_run_selected(self, monkeypatch):
        monkeypatch.setenv("HOMEHARNESS_WAIT_TIMEOUT_MS", "2000")
        result = CliRunner().invoke(main, ["run", "-s", "private_browsing_home_screen_items", "--attempts", "1"])
        assert result.exit_code == 0
        assert "All scenarios passed" in result.output

    def test_run_unknown_scenario(self):
        result = CliRunner().invoke(main, ["run", "-s", "nope"])
        assert result.exit_code == 2

    def test_run_invalid_attempts(self):
        result = CliRunner().invoke(main, ["run", "--attempts", "0"])
        assert result.exit_code == 2
