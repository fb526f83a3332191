"""Tests for the command-line interface."""

import json
from pathlib import Path

import pandas as pd
import pytest
from click.testing import CliRunner

from product_seo_engine.cli import main


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


class TestGenerateCommand:
    """Tests for `seo-engine generate`."""

    def test_generate_from_file(
        self, runner: CliRunner, tmp_path: Path, product_name: str, sample_raw_text: str
    ):
        raw_path = tmp_path / "output.txt"
        raw_path.write_text(sample_raw_text, encoding="utf-8")
        out_path = tmp_path / "record.json"

        result = runner.invoke(main, [
            "generate", "-n", product_name, "-c", "Audio",
            "--store-url", "https://shop.example.com",
            "--raw", str(raw_path), "-o", str(out_path),
        ])

        assert result.exit_code == 0, result.output
        assert "Compliance Report" in result.output
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert data["record"]["meta_title"] == "UltraSound Pro Wireless Earbuds - Premium Sound"
        assert data["record"]["permalink"] == "ultrasound-pro-wireless-earbuds"

    def test_generate_from_stdin(self, runner: CliRunner, tmp_path: Path):
        out_path = tmp_path / "record.json"

        result = runner.invoke(
            main,
            ["generate", "-n", "Desk Lamp with USB Charger", "-o", str(out_path)],
            input="META TITLE: Desk Lamp - Bright LED Light\n",
        )

        assert result.exit_code == 0, result.output
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert data["record"]["meta_title"] == "Desk Lamp - Bright LED Light"
        assert data["primary_keyword"] == "Desk Lamp"

    def test_generate_permalink_and_lenient(self, runner: CliRunner, tmp_path: Path):
        out_path = tmp_path / "record.json"

        result = runner.invoke(main, [
            "generate", "-n", "Desk Lamp", "--permalink", "lamp-for-desks",
            "--lenient", "-o", str(out_path),
        ], input="")

        assert result.exit_code == 0, result.output
        data = json.loads(out_path.read_text(encoding="utf-8"))
        assert data["record"]["permalink"] == "lamp-for-desks"
        assert not any("target is 750+" in w for w in data["report"]["warnings"])

    def test_generate_requires_name(self, runner: CliRunner):
        result = runner.invoke(main, ["generate"])

        assert result.exit_code != 0
        assert "--name" in result.output


class TestHealthCommand:
    """Tests for `seo-engine health`."""

    def test_health_summary(self, runner: CliRunner, sample_products_csv: Path, tmp_path: Path):
        out_path = tmp_path / "health.csv"

        result = runner.invoke(main, [
            "health", "-p", str(sample_products_csv), "--plugin", "rankmath", "-o", str(out_path),
        ])

        assert result.exit_code == 0, result.output
        assert "Content Health Summary" in result.output
        df = pd.read_csv(out_path)
        assert list(df["overall_status"]) == ["complete", "critical"]

    def test_health_verbose_lists_products(self, runner: CliRunner, sample_products_csv: Path):
        result = runner.invoke(main, ["-v", "health", "-p", str(sample_products_csv), "--workers", "2"])

        assert result.exit_code == 0, result.output
        assert "Bare Speaker" in result.output

    def test_health_load_error_exits_1(self, runner: CliRunner, tmp_path: Path):
        bad = tmp_path / "products.txt"
        bad.write_text("name\nLamp\n")

        result = runner.invoke(main, ["health", "-p", str(bad)])

        assert result.exit_code == 1
        assert "Product loading error" in result.output

    def test_health_rejects_unknown_plugin(self, runner: CliRunner, sample_products_csv: Path):
        result = runner.invoke(main, ["health", "-p", str(sample_products_csv), "--plugin", "seopress"])

        assert result.exit_code == 2
