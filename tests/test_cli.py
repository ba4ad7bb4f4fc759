"""Tests for CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from sonicpkg.cli.main import app

runner = CliRunner()


@pytest.fixture
def instance_file(tmp_path, valid_dns_instance):
    path = tmp_path / "dns.json"
    path.write_text(json.dumps(valid_dns_instance))
    return path


class TestRecipeCommands:
    """Tests for recipe commands."""

    def test_list(self, cli_env):
        result = runner.invoke(app, ["recipe", "list"])

        assert result.exit_code == 0
        assert "libyang3" in result.stdout
        assert "psample" in result.stdout

    def test_list_json(self, cli_env):
        result = runner.invoke(app, ["--output", "json", "recipe", "list"])

        assert result.exit_code == 0
        names = [r["name"] for r in json.loads(result.stdout)]
        assert names == ["libyang3", "libyang3-py3", "psample"]

    def test_show_json_includes_artifacts(self, cli_env):
        result = runner.invoke(app, ["-o", "json", "recipe", "show", "psample"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["artifacts"] == [
            "libpsample_1.1-1_amd64.deb",
            "libpsample-dbgsym_1.1-1_amd64.deb",
        ]

    def test_show_unknown(self, cli_env):
        result = runner.invoke(app, ["recipe", "show", "libnl3"])

        assert result.exit_code == 1
        assert "libnl3" in result.stdout

    def test_plan_json(self, cli_env, recipe_root):
        result = runner.invoke(app, ["-o", "json", "recipe", "plan", "libyang3-py3"])

        assert result.exit_code == 0
        steps = json.loads(result.stdout)
        assert [s["kind"] for s in steps] == ["clean", "fetch", "prepare", "build", "collect"]
        assert steps[2]["commands"] == ["QUILT_PATCHES=../patch quilt push -a"]
        assert steps[3]["commands"] == [
            "dpkg-buildpackage -rfakeroot -b -us -uc -j2 --admindir /sonic/dpkg"
        ]
        assert not (recipe_root / "libyang3-py3" / "libyang-python").exists()


class TestBuildCommands:
    """Tests for build commands."""

    def test_dry_run(self, cli_env, tmp_path):
        result = runner.invoke(app, ["-o", "json", "build", "--dry-run", "libyang3"])

        assert result.exit_code == 0
        results = json.loads(result.stdout)
        assert results[0]["recipe"] == "libyang3"
        assert results[0]["state"] == "completed"
        assert not (tmp_path / "debs").exists()

    def test_unknown_target(self, cli_env):
        result = runner.invoke(app, ["build", "libfoo_1.0_amd64.deb"])

        assert result.exit_code == 1

    def test_up_to_date(self, cli_env, tmp_path):
        dest = tmp_path / "debs"
        dest.mkdir()
        (dest / "python3-libyang_3.1.0-1_amd64.deb").write_text("deb")

        result = runner.invoke(app, ["-o", "json", "build", "python3-libyang_3.1.0-1_amd64.deb"])

        assert result.exit_code == 0
        assert json.loads(result.stdout)[0]["state"] == "skipped"

    def test_env(self, cli_env):
        result = runner.invoke(app, ["-o", "json", "env"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["configured_arch"] == "amd64"
        assert data["sonic_config_make_jobs"] == 2


class TestDnsCommands:
    """Tests for dns commands."""

    def test_validate_valid(self, instance_file):
        result = runner.invoke(app, ["dns", "validate", str(instance_file)])

        assert result.exit_code == 0
        assert "valid" in result.stdout

    def test_validate_invalid(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"DNS_OPTIONS": {"ndots": 2}}))

        result = runner.invoke(app, ["dns", "validate", str(path)])

        assert result.exit_code == 1
        assert "errors" in result.stdout

    def test_validate_json_output(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"DNS_NAMESERVER": ["8.8.8.8", "1.1.1.1", "1.0.0.1", "9.9.9.9"]}))

        result = runner.invoke(app, ["-o", "json", "dns", "validate", str(path)])

        assert result.exit_code == 1
        data = json.loads(result.stdout)
        assert data["valid"] is False
        assert data["errors"][0]["path"] == "/DNS_NAMESERVER"

    def test_validate_malformed_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        result = runner.invoke(app, ["dns", "validate", str(path)])

        assert result.exit_code == 1

    def test_validate_directory(self, tmp_path):
        result = runner.invoke(app, ["dns", "validate", str(tmp_path)])

        assert result.exit_code == 1
        assert "Cannot read" in result.stdout

    def test_validate_not_utf8(self, tmp_path):
        path = tmp_path / "latin1.json"
        path.write_bytes(b'{"DNS_OPTIONS": {"search": ["caf\xe9"]}}')

        result = runner.invoke(app, ["dns", "validate", str(path)])

        assert result.exit_code == 1
        assert "Cannot read" in result.stdout

    def test_resolv_conf_missing_file(self, tmp_path):
        result = runner.invoke(app, ["dns", "resolv-conf", str(tmp_path / "absent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.stdout

    def test_resolv_conf(self, instance_file):
        result = runner.invoke(app, ["dns", "resolv-conf", str(instance_file)])

        assert result.exit_code == 0
        assert result.stdout == (
            "nameserver 8.8.8.8\nnameserver 1.1.1.1\noptions ndots:2 timeout:5 attempts:3\n"
        )

    def test_schema_limits_json(self):
        result = runner.invoke(app, ["-o", "json", "dns", "schema", "--limits"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["max_elements"] == {"DNS_NAMESERVER_LIST": 3}
        assert data["leaves"]["timeout"] == {"minimum": 1, "maximum": 30, "default": 5}

    def test_schema(self):
        result = runner.invoke(app, ["dns", "schema"])

        assert result.exit_code == 0
        assert "sonic-dns" in result.stdout


class TestVersion:
    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert "sonicpkg version" in result.stdout
