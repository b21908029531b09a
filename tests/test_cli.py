"""Tests for the Click CLI interface.

These tests verify that:
1. CLI arguments are parsed correctly
2. Environment variables are used as fallbacks
3. CLI arguments take precedence over environment variables
4. Configuration and publish failures never produce a nonzero exit
5. Help and version options work
"""

import tempfile
import unittest
from importlib import import_module
from pathlib import Path
from unittest.mock import Mock, patch

from click.testing import CliRunner

from vsm_publisher._publish import PublishOutcome
from vsm_publisher.cli.main import VSM_PUBLISHER_VERSION, Config, build_config, cli, evaluate_boolean
from vsm_publisher.exceptions import ConfigurationError
from vsm_publisher.logging_config import StructuredFormatter, logger, set_log_format

# Import the module object explicitly so we can patch its attributes.
# vsm_publisher.cli.__init__.py re-exports the `main` function, so
# `from vsm_publisher.cli.main import main` would give us the function, not the module.
cli_main_module = import_module("vsm_publisher.cli.main")

REQUIRED_ARGS = ["--region", "eu", "--host", "acme", "--api-token", "secret"]

PYPROJECT = """
[project]
name = "checkout"
version = "1.4.0"

[tool.vsm-publisher]
group-id = "com.acme"
"""


class TestCLIHelp(unittest.TestCase):
    """Test CLI help and version options."""

    def setUp(self):
        self.runner = CliRunner()

    def test_help_option(self):
        result = self.runner.invoke(cli, ["--help"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("LeanIX VSM", result.output)
        self.assertIn("--region", result.output)
        self.assertIn("--skip-snapshot", result.output)
        self.assertIn("--sbom-path", result.output)

    def test_short_help_option(self):
        result = self.runner.invoke(cli, ["-h"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("--api-token", result.output)

    def test_version_option(self):
        result = self.runner.invoke(cli, ["--version"])
        self.assertEqual(result.exit_code, 0)
        self.assertIn("vsm-publisher", result.output)
        self.assertIn(VSM_PUBLISHER_VERSION, result.output)


class TestCLIArgumentParsing(unittest.TestCase):
    """Test CLI argument parsing into Config."""

    def setUp(self):
        self.runner = CliRunner()
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)
        self.project_dir = self.tmp_dir.name

    @patch.object(cli_main_module, "run_pipeline")
    def test_required_arguments(self, mock_run):
        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--project-dir", self.project_dir])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_run.assert_called_once()
        config = mock_run.call_args[0][0]
        self.assertEqual(config.region, "eu")
        self.assertEqual(config.host, "acme")
        self.assertEqual(config.api_token, "secret")
        self.assertTrue(config.skip_snapshot)
        self.assertEqual(config.data, "{}")
        self.assertEqual(config.source_type, "python")
        self.assertEqual(config.source_instance, "vsm-publisher")
        self.assertEqual(config.domain, "leanix.net")
        self.assertIsNone(config.sbom_path)

    @patch.object(cli_main_module, "run_pipeline")
    def test_all_arguments(self, mock_run):
        result = self.runner.invoke(
            cli,
            REQUIRED_ARGS
            + [
                "--project-dir",
                self.project_dir,
                "--sbom-path",
                "build/sbom.json",
                "--no-skip-snapshot",
                "--data",
                '{"team": "payments"}',
                "--source-type",
                "java",
                "--source-instance",
                "jenkins",
                "--group-id",
                "com.acme",
                "--artifact-id",
                "checkout",
                "--project-version",
                "1.0.0",
                "--description",
                "Checkout service",
                "--domain",
                "example.test",
            ],
        )

        self.assertEqual(result.exit_code, 0, result.output)
        config = mock_run.call_args[0][0]
        self.assertEqual(config.sbom_path, "build/sbom.json")
        self.assertFalse(config.skip_snapshot)
        self.assertEqual(config.data, '{"team": "payments"}')
        self.assertEqual(config.source_type, "java")
        self.assertEqual(config.source_instance, "jenkins")
        self.assertEqual(config.group_id, "com.acme")
        self.assertEqual(config.artifact_id, "checkout")
        self.assertEqual(config.project_version, "1.0.0")
        self.assertEqual(config.description, "Checkout service")
        self.assertEqual(config.domain, "example.test")

    @patch.object(cli_main_module, "run_pipeline")
    def test_environment_fallback(self, mock_run):
        env = {
            "VSM_REGION": "us",
            "VSM_HOST": "envhost",
            "VSM_API_TOKEN": "envtoken",
            "VSM_SKIP_SNAPSHOT": "false",
            "VSM_PROJECT_DIR": self.project_dir,
        }
        result = self.runner.invoke(cli, [], env=env)

        self.assertEqual(result.exit_code, 0, result.output)
        config = mock_run.call_args[0][0]
        self.assertEqual(config.region, "us")
        self.assertEqual(config.host, "envhost")
        self.assertEqual(config.api_token, "envtoken")
        self.assertFalse(config.skip_snapshot)

    @patch.object(cli_main_module, "run_pipeline")
    def test_cli_overrides_environment(self, mock_run):
        result = self.runner.invoke(
            cli,
            ["--region", "ca", "--project-dir", self.project_dir],
            env={"VSM_REGION": "us", "VSM_HOST": "acme", "VSM_API_TOKEN": "t"},
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertEqual(mock_run.call_args[0][0].region, "ca")

    @patch.object(cli_main_module, "run_pipeline")
    def test_missing_region_exits_zero_without_running(self, mock_run):
        result = self.runner.invoke(cli, ["--host", "acme", "--api-token", "t", "--project-dir", self.project_dir])

        self.assertEqual(result.exit_code, 0)
        mock_run.assert_not_called()
        self.assertIn("region", result.output)

    def test_invalid_log_level_rejected(self):
        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--log-level", "LOUD"])
        self.assertNotEqual(result.exit_code, 0)

    @patch.object(cli_main_module, "run_pipeline")
    def test_json_log_format_selects_structured_formatter(self, mock_run):
        self.addCleanup(set_log_format, "text")

        result = self.runner.invoke(
            cli, REQUIRED_ARGS + ["--project-dir", self.project_dir], env={"VSM_LOG_FORMAT": "json"}
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertTrue(logger.handlers)
        for handler in logger.handlers:
            self.assertIsInstance(handler.formatter, StructuredFormatter)

    def test_invalid_log_format_rejected(self):
        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--log-format", "xml"])
        self.assertNotEqual(result.exit_code, 0)

    @patch.object(cli_main_module, "run_pipeline")
    def test_malformed_sentry_dsn_exits_zero(self, mock_run):
        result = self.runner.invoke(
            cli,
            REQUIRED_ARGS + ["--project-dir", self.project_dir],
            env={"TELEMETRY": "true", "SENTRY_DSN": "not-a-dsn"},
        )

        self.assertEqual(result.exit_code, 0, result.output)
        mock_run.assert_called_once()


class TestCLIPipeline(unittest.TestCase):
    """End-to-end CLI runs with HTTP stubbed."""

    def setUp(self):
        self.runner = CliRunner()
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp_dir.cleanup)
        self.project_dir = Path(self.tmp_dir.name)
        (self.project_dir / "pyproject.toml").write_text(PYPROJECT)

    @patch("vsm_publisher._publish.publisher.requests.post")
    @patch("vsm_publisher._publish.auth.requests.post")
    def test_publish_failure_exits_zero(self, mock_auth, mock_publish):
        token_response = Mock(status_code=401)
        mock_auth.return_value = token_response

        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--project-dir", str(self.project_dir)])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_publish.assert_not_called()

    @patch("vsm_publisher._publish.publisher.requests.post")
    @patch("vsm_publisher._publish.auth.requests.post")
    def test_publish_success(self, mock_auth, mock_publish):
        token_response = Mock(status_code=200)
        token_response.json.return_value = {"access_token": "bearer-123"}
        mock_auth.return_value = token_response
        discovery_response = Mock(status_code=200, reason="OK", text="{}")
        discovery_response.json.return_value = {}
        mock_publish.return_value = discovery_response

        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--project-dir", str(self.project_dir)])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Relayed to VSM", result.output)
        parts = dict(mock_publish.call_args.kwargs["files"])
        self.assertEqual(parts["id"], (None, "com.acme.checkout"))

    @patch("vsm_publisher._publish.auth.requests.post")
    def test_unresolvable_project_exits_zero(self, mock_auth):
        (self.project_dir / "pyproject.toml").unlink()

        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--project-dir", str(self.project_dir)])

        self.assertEqual(result.exit_code, 0, result.output)
        mock_auth.assert_not_called()

    @patch("vsm_publisher._publish.auth.requests.post")
    def test_wrongly_typed_pyproject_exits_zero(self, mock_auth):
        (self.project_dir / "pyproject.toml").write_text('project = "oops"\n')

        result = self.runner.invoke(cli, REQUIRED_ARGS + ["--project-dir", str(self.project_dir)])

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Warning", result.output)
        mock_auth.assert_not_called()

    @patch("vsm_publisher._publish.auth.requests.post")
    def test_snapshot_skipped(self, mock_auth):
        result = self.runner.invoke(
            cli,
            REQUIRED_ARGS + ["--project-dir", str(self.project_dir), "--project-version", "2.0-SNAPSHOT"],
        )

        self.assertEqual(result.exit_code, 0, result.output)
        self.assertIn("Skipped", result.output)
        mock_auth.assert_not_called()


class TestBuildConfig(unittest.TestCase):
    """Tests for build_config and Config.validate."""

    def test_valid(self):
        config = build_config(region="eu", host="acme", api_token="t")
        self.assertIsInstance(config, Config)
        self.assertEqual(config.data, "{}")

    def test_empty_sbom_path_becomes_none(self):
        config = build_config(region="eu", host="acme", api_token="t", sbom_path="")
        self.assertIsNone(config.sbom_path)

    def test_missing_values(self):
        for kwargs, field in (
            ({"region": None, "host": "acme", "api_token": "t"}, "region"),
            ({"region": "eu", "host": "", "api_token": "t"}, "host"),
            ({"region": "eu", "host": "acme", "api_token": None}, "API token"),
        ):
            with self.assertRaises(ConfigurationError) as ctx:
                build_config(**kwargs)
            self.assertIn(field, str(ctx.exception))

    def test_missing_project_dir(self):
        with self.assertRaises(ConfigurationError):
            build_config(region="eu", host="acme", api_token="t", project_dir="/does/not/exist")

    def test_to_publish_input(self):
        config = build_config(region="eu", host="acme", api_token="t", data='{"a": 1}', skip_snapshot=False)
        project = Mock()
        publish_input = config.to_publish_input(project)
        self.assertIs(publish_input.project, project)
        self.assertEqual(publish_input.data, '{"a": 1}')
        self.assertFalse(publish_input.skip_snapshot)


class TestRunPipeline(unittest.TestCase):
    @patch.object(cli_main_module, "PublishOrchestrator")
    def test_returns_orchestrator_outcome(self, mock_orchestrator):
        expected = PublishOutcome.success_result(http_status=200)
        mock_orchestrator.return_value.run.return_value = expected
        with tempfile.TemporaryDirectory() as tmp_dir:
            (Path(tmp_dir) / "pyproject.toml").write_text(PYPROJECT)
            config = build_config(region="eu", host="acme", api_token="t", project_dir=tmp_dir)

            outcome = cli_main_module.run_pipeline(config)

        self.assertIs(outcome, expected)


class TestEvaluateBoolean(unittest.TestCase):
    def test_truthy(self):
        for value in ("true", "True", "yes", "yeah", "1"):
            self.assertTrue(evaluate_boolean(value))

    def test_falsy(self):
        for value in ("false", "no", "0", ""):
            self.assertFalse(evaluate_boolean(value))
