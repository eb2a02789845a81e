from unittest.mock import patch

from click.testing import CliRunner

from vehicle_checks_cli import cli


class TestCli:
    def test_vehicles_lists_fleet(self) -> None:
        result = CliRunner().invoke(cli, ["vehicles"])

        assert result.exit_code == 0
        assert "VH001" in result.output
        assert "ABC-123" in result.output
        assert "2023 Mitsubishi Triton" in result.output

    def test_app_replaces_process_with_uvicorn(self) -> None:
        with (
            patch("vehicle_checks_cli.os.execvp") as execvp,
            patch("vehicle_checks_cli.subprocess.run") as run,
        ):
            result = CliRunner().invoke(cli, ["app", "--", "--port", "8080"])

        assert result.exit_code == 0
        execvp.assert_called_once_with(
            "uv",
            [
                "uv",
                "run",
                "uvicorn",
                "vehicle_checks.app:app",
                "--reload",
                "--port",
                "8080",
            ],
        )
        run.assert_not_called()

    def test_lint_reports_failure(self) -> None:
        with patch("vehicle_checks_cli.subprocess.run") as run:
            run.return_value.returncode = 1
            result = CliRunner().invoke(cli, ["lint"])

        assert result.exit_code == 1
        run.assert_called_once_with(["uv", "run", "mypy", "vehicle_checks"])
        assert "exited with code 1" in result.output
