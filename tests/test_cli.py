"""
Tests for the command line interface.
"""

import json

import pytest
import typer
from typer.testing import CliRunner

from profileeditor.cli.app import app, apply_edit_operation, parse_edit_operation
from profileeditor.domain.date_set import DateSetEngine

runner = CliRunner()


@pytest.fixture
def store_file(tmp_path, monkeypatch):
    """Profile file with one professional; no config.yaml in the working directory."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("profileeditor.config.get_default_config_path", lambda: tmp_path / "config.yaml")

    path = tmp_path / "profiles.json"
    path.write_text(
        json.dumps(
            {
                "pro-1": {
                    "name": "Studio Lumière",
                    "availability": ["2024-03-20"],
                    "services": [
                        {"name": "Mixage", "description": "", "price": 150, "features": ["Stems"], "category": "studio"}
                    ],
                }
            }
        ),
        encoding="utf-8",
    )
    return path


def _stored(path):
    return json.loads(path.read_text(encoding="utf-8"))["pro-1"]


class TestEditOperations:
    """Tests for parsing and applying availability operations."""

    def test_parse(self):
        """Test the kind:value syntax."""
        assert parse_edit_operation("week:2024-03-04") == ("week", "2024-03-04")
        assert parse_edit_operation("CLEAR") == ("clear", None)

    @pytest.mark.parametrize("raw", ["year:2024", "toggle", "toggle:  "])
    def test_parse_rejects(self, raw):
        """Test unknown kinds and missing values."""
        with pytest.raises(typer.BadParameter):
            parse_edit_operation(raw)

    def test_apply_sequence(self):
        """Test the week, toggle, month sequence."""
        editor = DateSetEngine(today="2024-03-01")

        apply_edit_operation(editor, "week", "2024-03-04")
        apply_edit_operation(editor, "toggle", "2024-03-04")
        assert editor.count == 6

        apply_edit_operation(editor, "month", "2024-03")
        assert editor.count == 31


class TestAvailabilityCommands:
    """Tests for the availability sub-commands."""

    def test_show(self, store_file):
        """Test that the stored dates are listed."""
        result = runner.invoke(app, ["availability", "show", "pro-1", "--store", str(store_file)])

        assert result.exit_code == 0
        assert "Dates sélectionnées : 1" in result.output

    def test_edit_saves(self, store_file):
        """Test that operations are applied in order and saved."""
        result = runner.invoke(
            app,
            ["availability", "edit", "pro-1", "week:2024-03-04", "toggle:2024-03-04", "--store", str(store_file)],
        )

        assert result.exit_code == 0
        assert _stored(store_file)["availability"] == [
            "2024-03-05", "2024-03-06", "2024-03-07", "2024-03-08", "2024-03-09", "2024-03-10", "2024-03-20",
        ]

    def test_edit_dry_run(self, store_file):
        """Test that --dry-run leaves the file untouched."""
        result = runner.invoke(
            app,
            ["availability", "edit", "pro-1", "clear", "month:2024-02", "--dry-run", "--store", str(store_file)],
        )

        assert result.exit_code == 0
        assert "Dates sélectionnées : 29" in result.output
        assert _stored(store_file)["availability"] == ["2024-03-20"]

    def test_edit_timestamps_west_of_utc(self, store_file, tmp_path):
        """Test that timestamp output survives two edit sessions west of UTC."""
        (tmp_path / "config.yaml").write_text(
            "timezone: America/Montreal\navailability:\n  output_format: timestamp\n", encoding="utf-8"
        )

        first = runner.invoke(app, ["availability", "edit", "pro-1", "toggle:2024-03-04", "--store", str(store_file)])
        second = runner.invoke(app, ["availability", "edit", "pro-1", "toggle:2024-03-05", "--store", str(store_file)])

        assert first.exit_code == 0
        assert second.exit_code == 0
        assert _stored(store_file)["availability"] == [
            "2024-03-04T05:00:00.000Z", "2024-03-05T05:00:00.000Z", "2024-03-20T04:00:00.000Z",
        ]

    def test_edit_bad_date(self, store_file):
        """Test that an unreadable date fails without saving."""
        result = runner.invoke(
            app, ["availability", "edit", "pro-1", "toggle:2024-99-99", "--store", str(store_file)]
        )

        assert result.exit_code == 1
        assert _stored(store_file)["availability"] == ["2024-03-20"]

    def test_unknown_user(self, store_file):
        """Test that a missing profile is reported."""
        result = runner.invoke(app, ["availability", "show", "ghost", "--store", str(store_file)])

        assert result.exit_code == 1
        assert "No profile" in result.output


class TestServiceCommands:
    """Tests for the services sub-commands."""

    def test_list(self, store_file):
        """Test the services table."""
        result = runner.invoke(app, ["services", "list", "pro-1", "--store", str(store_file)])

        assert result.exit_code == 0
        assert "Mixage" in result.output

    def test_add_priced_service(self, store_file):
        """Test adding a complete priced service."""
        result = runner.invoke(
            app,
            [
                "services", "add", "pro-1",
                "--name", "Mastering",
                "--hourly-rate", "60",
                "--category", "production",
                "--feature", "Master WAV",
                "--feature", "Master MP3",
                "--store", str(store_file),
            ],
        )

        assert result.exit_code == 0
        services = _stored(store_file)["services"]
        assert [s["name"] for s in services] == ["Mixage", "Mastering"]
        assert services[1]["hourlyRate"] == 60
        assert services[1]["features"] == ["Master WAV", "Master MP3"]

    def test_add_posting(self, store_file):
        """Test adding an application service without price."""
        result = runner.invoke(
            app,
            [
                "services", "add", "pro-1",
                "--name", "Reportage",
                "--category", "media",
                "--availability", "weekends only",
                "--store", str(store_file),
            ],
        )

        assert result.exit_code == 0
        assert _stored(store_file)["services"][1]["availability"] == "weekends only"

    def test_add_incomplete_is_refused(self, store_file):
        """Test that an incomplete service is reported and nothing is saved."""
        result = runner.invoke(
            app,
            ["services", "add", "pro-1", "--name", "Beatmaking", "--category", "production", "--store", str(store_file)],
        )

        assert result.exit_code == 1
        assert "Beatmaking" in result.output
        assert len(_stored(store_file)["services"]) == 1

    def test_add_incomplete_forced(self, store_file):
        """Test that --force saves without the incomplete service."""
        result = runner.invoke(
            app,
            [
                "services", "add", "pro-1",
                "--name", "Beatmaking",
                "--category", "production",
                "--force",
                "--store", str(store_file),
            ],
        )

        assert result.exit_code == 0
        assert [s["name"] for s in _stored(store_file)["services"]] == ["Mixage"]

    def test_add_unknown_category(self, store_file):
        """Test that unknown categories are rejected."""
        result = runner.invoke(
            app,
            ["services", "add", "pro-1", "--name", "X", "--price", "10", "--category", "cuisine", "--store", str(store_file)],
        )

        assert result.exit_code == 1
        assert "Unknown category" in result.output

    def test_add_infinite_price(self, store_file):
        """Test that a non-finite price is rejected and nothing is saved."""
        result = runner.invoke(
            app,
            ["services", "add", "pro-1", "--name", "Mix", "--price", "inf", "--category", "studio", "--store", str(store_file)],
        )

        assert result.exit_code == 1
        assert "price must be zero or positive" in result.output
        assert len(_stored(store_file)["services"]) == 1

    def test_remove(self, store_file):
        """Test removing the only service."""
        result = runner.invoke(app, ["services", "remove", "pro-1", "1", "--store", str(store_file)])

        assert result.exit_code == 0
        assert _stored(store_file)["services"] == []

    def test_remove_out_of_range(self, store_file):
        """Test removing a service that does not exist."""
        result = runner.invoke(app, ["services", "remove", "pro-1", "5", "--store", str(store_file)])

        assert result.exit_code == 1
        assert len(_stored(store_file)["services"]) == 1


def test_categories_command():
    """All categories are listed with their labels."""
    result = runner.invoke(app, ["categories"])

    assert result.exit_code == 0
    assert "evenementiel" in result.output
    assert "Média" in result.output
