import csv
import json

import pytest
from click.testing import CliRunner

from addrflip.cli import cli

FOOBAR_HEX = "6d7361776d736f63317665686b37636e707767636e7976636c773679396a"


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, tmp_path):
    missing = str(tmp_path / "missing.ini")

    def _invoke(*args, **kwargs):
        return runner.invoke(cli, ["--config", missing, *args], **kwargs)

    return _invoke


def _rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


class TestCanonicalize:
    def test_default_prefix(self, invoke):
        result = invoke("canonicalize", "foobar123")
        assert result.exit_code == 0
        assert f"hex:  {FOOBAR_HEX}" in result.output
        assert "text: msawmsoc1vehk7cnpwgcnyvclw6y9j" in result.output

    def test_prefix_from_env(self, invoke, monkeypatch):
        monkeypatch.setenv("ADDRFLIP_PREFIX", "mockapi")
        result = invoke("canonicalize", "f")
        assert result.exit_code == 0
        assert "text: ipakcom1vcgx2zs4" in result.output

    def test_too_long(self, invoke):
        result = invoke("canonicalize", "x" * 200)
        assert result.exit_code == 1
        assert "Invalid input" in result.output


class TestHumanize:
    def test_unwraps(self, invoke):
        result = invoke("humanize", FOOBAR_HEX)
        assert result.exit_code == 0
        assert result.output.strip() == "foobar123"

    def test_accepts_0x(self, invoke):
        result = invoke("humanize", "0x" + FOOBAR_HEX)
        assert result.output.strip() == "foobar123"

    def test_raw_bytes(self, invoke):
        result = invoke("--prefix", "juno", "humanize", "00" * 20)
        assert result.exit_code == 0
        assert result.output.startswith("juno1")

    def test_bad_hex(self, invoke):
        result = invoke("humanize", "zz")
        assert result.exit_code == 2
        assert "not valid hex" in result.output


class TestValidate:
    def test_ok(self, invoke):
        result = invoke("validate", "foobar123")
        assert result.exit_code == 0
        assert result.output.strip() == "ok"

    def test_not_normalized(self, invoke):
        result = invoke("validate", "Foobar123")
        assert result.exit_code == 1
        assert result.output.strip() == "not normalized"


class TestMake:
    def test_make_and_validate(self, invoke):
        made = invoke("--prefix", "osmo", "make", "bobby").output.strip()
        assert made.startswith("osmo1")
        result = invoke("--prefix", "osmo", "validate", made)
        assert result.output.strip() == "ok"

    def test_variant_option(self, invoke):
        b32 = invoke("make", "bobby").output.strip()
        b32m = invoke("--variant", "bech32m", "make", "bobby").output.strip()
        assert b32 != b32m
        assert b32[:-6] == b32m[:-6]


class TestInstantiate2:
    def test_predicts_address(self, invoke):
        creator = invoke("make", "creator").output.strip()
        result = invoke("instantiate2", "00" * 32, creator, "646566")
        assert result.exit_code == 0
        human = result.output.strip()
        assert human.startswith("cosmwasm1")
        assert invoke("validate", human).output.strip() == "ok"

    def test_bad_salt(self, invoke):
        result = invoke("instantiate2", "00" * 32, "creator", "")
        assert result.exit_code == 1
        assert "salt" in result.output


class TestBatch:
    def test_txt(self, invoke, tmp_path):
        src = tmp_path / "inputs.txt"
        src.write_text("foobar123\n\nFOO123\n" + "x" * 200 + "\n", encoding="utf-8")
        out = tmp_path / "out.csv"
        result = invoke("batch", str(src), "--csv-out", str(out))
        assert result.exit_code == 0
        rows = _rows(out)
        assert rows[0] == ["input", "canonical_hex", "human"]
        assert rows[1] == ["foobar123", FOOBAR_HEX, "foobar123"]
        assert rows[2][0] == "FOO123"
        assert rows[2][2] == "foo123"
        assert rows[3][1].startswith("<error:")
        assert len(rows) == 4

    def test_json(self, invoke, tmp_path):
        src = tmp_path / "inputs.json"
        src.write_text(json.dumps(["a", {"address": "foobar123"}, 7]), encoding="utf-8")
        out = tmp_path / "out.csv"
        invoke("batch", str(src), "--csv-out", str(out))
        rows = _rows(out)
        assert [r[0] for r in rows[1:]] == ["a", "foobar123"]
        assert rows[1][1] == b"msawmsoc1vylhjcfd".hex()

    def test_csv_address_column(self, invoke, tmp_path):
        src = tmp_path / "inputs.csv"
        src.write_text("name,Address\nx,foo\ny,bar\n", encoding="utf-8")
        out = tmp_path / "out.csv"
        invoke("batch", str(src), "--csv-out", str(out))
        assert [r[2] for r in _rows(out)[1:]] == ["foo", "bar"]

    def test_csv_first_column(self, invoke, tmp_path):
        src = tmp_path / "inputs.csv"
        src.write_text("who,note\nalice,x\nbob,y\n", encoding="utf-8")
        out = tmp_path / "out.csv"
        invoke("batch", str(src), "--csv-out", str(out))
        assert [r[0] for r in _rows(out)[1:]] == ["alice", "bob"]

    def test_stdin(self, invoke, tmp_path):
        out = tmp_path / "out.csv"
        result = invoke("batch", "-", "--csv-out", str(out), input="shorty\n")
        assert result.exit_code == 0
        assert _rows(out)[1][2] == "shorty"

    def test_unsupported_type(self, invoke, tmp_path):
        src = tmp_path / "inputs.xml"
        src.write_text("<a/>", encoding="utf-8")
        result = invoke("batch", str(src), "--csv-out", str(tmp_path / "out.csv"))
        assert result.exit_code == 1
        assert "Unsupported file type" in result.output


class TestGroupOptions:
    def test_bad_prefix(self, invoke):
        result = invoke("--prefix", "JuNo", "make", "x")
        assert result.exit_code == 1
        assert "mixed case" in result.output

    def test_bad_env_variant(self, invoke, monkeypatch):
        monkeypatch.setenv("ADDRFLIP_VARIANT", "base58")
        result = invoke("make", "x")
        assert result.exit_code == 1
        assert "Unknown variant" in result.output

    def test_config_file(self, runner, tmp_path):
        ini = tmp_path / "addrflip.ini"
        ini.write_text("[transcoder]\nprefix = mockapi\n", encoding="utf-8")
        result = runner.invoke(cli, ["--config", str(ini), "canonicalize", ""])
        assert "text: ipakcom1sqnhk4" in result.output
