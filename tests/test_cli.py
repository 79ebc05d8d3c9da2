import json
import os
import re
import subprocess
import sys
from dataclasses import replace
from pathlib import Path

from sten_core.header import build, compute_checksum, serialize

REPO = Path(__file__).resolve().parents[1]


def run(args, cwd, **extra_env):
    env = dict(os.environ, **extra_env)
    env["PYTHONPATH"] = os.pathsep.join([str(REPO / "src"), env.get("PYTHONPATH", "")])
    return subprocess.run(
        [sys.executable, *args], cwd=cwd, env=env, check=False, capture_output=True, text=True
    )


def sten(*args, cwd, **extra_env):
    return run(["-m", "sten_engine.cli", *args], cwd=cwd, **extra_env)


def make_inputs(tmp_path):
    host = tmp_path / "cover.png"
    host.write_bytes(bytes(range(256)) * 100)
    secret = tmp_path / "secret.txt"
    secret.write_bytes(b"the eagle lands at midnight\n")
    return host, secret


def test_encode_decode_stdout_contract(tmp_path):
    host, secret = make_inputs(tmp_path)
    base = tmp_path / "out" / "stego-1700000000"
    base.parent.mkdir()

    r = sten("encode", str(host), str(secret), str(base), cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout

    # Same pattern the HTTP wrapper uses
    m = re.search(r"Output file:\s*(.+)", r.stdout, re.I)
    assert m, r.stdout
    stego = Path(m.group(1).strip())
    assert stego.name == "stego-1700000000.png"
    assert stego.name.startswith(base.name)
    assert stego.exists()

    r = sten("decode", str(stego), "", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    m = re.search(r"Extracted file:\s*(.+)", r.stdout, re.I)
    assert m, r.stdout
    assert m.group(1).strip() == "extracted_secret.txt"
    assert (tmp_path / "extracted_secret.txt").read_bytes() == secret.read_bytes()


def test_decode_without_extension_borrows_stored_one(tmp_path):
    host, secret = make_inputs(tmp_path)
    r = sten("encode", str(host), str(secret), "stego.png", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout

    r = sten("decode", "stego.png", "output/extracted-1700000000", cwd=tmp_path)
    assert r.returncode == 1  # output/ does not exist yet
    assert "ERROR: Cannot create output file" in r.stderr

    (tmp_path / "output").mkdir()
    r = sten("decode", "stego.png", "output/extracted-1700000000", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Extracted file: output/extracted-1700000000.txt" in r.stdout
    assert (tmp_path / "output" / "extracted-1700000000.txt").read_bytes() == secret.read_bytes()


def test_failures_exit_1_with_stderr(tmp_path):
    host, secret = make_inputs(tmp_path)

    r = sten("decode", str(host), "", cwd=tmp_path)
    assert r.returncode == 1
    assert "ERROR: No hidden data found in file" in r.stderr

    r = sten("encode", str(tmp_path / "missing.png"), str(secret), "out.png", cwd=tmp_path)
    assert r.returncode == 1
    assert "Host file not found" in r.stderr

    small = tmp_path / "small.png"
    small.write_bytes(b"\x00" * 1000)
    r = sten("encode", str(small), str(secret), "out.png", cwd=tmp_path)
    assert r.returncode == 1
    assert "too small" in r.stderr
    assert not (tmp_path / "out.png").exists()


def test_usage_errors_exit_1(tmp_path):
    r = sten("encode", "only-one-arg", cwd=tmp_path)
    assert r.returncode == 1

    r = sten("bogus", cwd=tmp_path)
    assert r.returncode == 1


def test_inspect_prints_header_json(tmp_path):
    host, secret = make_inputs(tmp_path)
    r = sten("encode", str(host), str(secret), "stego.png", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout

    r = sten("inspect", "stego.png", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    result = json.loads(r.stdout)
    assert result["header"]["filename"] == "secret.txt"
    assert result["header"]["payload_size"] == secret.stat().st_size
    assert result["header_offset"] == host.stat().st_size
    assert result["payload_offset"] == host.stat().st_size + 272
    assert result["scan"]["probes"] == secret.stat().st_size + 1


def test_info(tmp_path):
    r = sten("info", cwd=tmp_path)
    assert r.returncode == 0, r.stderr
    assert "0x5354454E" in r.stdout
    assert "85%" in r.stdout
    assert "10.00 KB" in r.stdout


def test_decoy_host_masks_real_payload(tmp_path):
    r = run([str(REPO / "tools" / "make_host.py"), "decoyed.bin", "--size", "30000", "--decoy", "readme.txt"], cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    assert "GENERATED:" in r.stdout

    # The decoy file on its own extracts the decoy
    r = sten("decode", "decoyed.bin", "", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    assert (tmp_path / "extracted_readme.txt").read_bytes() == b"nothing to see here\n"

    # Hidden as a payload, its decoy header sits nearer the tail than the real one
    r = run([str(REPO / "tools" / "make_host.py"), "cover.bin", "--size", "60000", "--seed", "5"], cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    r = sten("encode", "cover.bin", "decoyed.bin", "stego.bin", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout

    r = sten("decode", "stego.bin", "recovered", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout
    assert (tmp_path / "recovered.txt").read_bytes() == b"nothing to see here\n"


def test_corrupted_checksum_hides_payload(tmp_path):
    host, secret = make_inputs(tmp_path)
    r = sten("encode", str(host), str(secret), "stego.png", cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout

    checksum_offset = host.stat().st_size + 268
    r = run([str(REPO / "scripts" / "corrupt_one_byte.py"), "stego.png", str(checksum_offset)], cwd=tmp_path)
    assert r.returncode == 0, r.stderr + r.stdout

    r = sten("decode", "stego.png", "", cwd=tmp_path)
    assert r.returncode == 1
    assert "No hidden data found" in r.stderr


def test_decode_name_that_is_not_utf8_on_utf8_stdout(tmp_path):
    # Original writers cut names at 255 bytes, even inside a character
    base = build("x", 5)
    cut = ("a" * 254 + "é").encode("utf-8")[:255]
    header = replace(base, filename=cut.ljust(256, b"\x00"), filename_length=len(cut))
    header = replace(header, checksum=compute_checksum(header))
    (tmp_path / "stego.bin").write_bytes(b"\x00" * 20000 + serialize(header) + b"hello")

    r = sten("decode", "stego.bin", "out.bin", cwd=tmp_path, PYTHONIOENCODING="utf-8")
    assert r.returncode == 0, r.stderr + r.stdout
    assert "Original filename: " + "a" * 254 + "\\xc3" in r.stdout
    assert "Extracted file: out.bin" in r.stdout
    assert (tmp_path / "out.bin").read_bytes() == b"hello"

    r = sten("inspect", "stego.bin", cwd=tmp_path, PYTHONIOENCODING="utf-8")
    assert r.returncode == 0, r.stderr + r.stdout
    assert json.loads(r.stdout)["header"]["filename"] == "a" * 254 + "\\xc3"


def test_magic_flood_writes_one_warning(tmp_path):
    (tmp_path / "flood.txt").write_bytes(b"NETS" * 50000)

    r = sten("decode", "flood.txt", "", cwd=tmp_path)
    assert r.returncode == 1
    assert "No hidden data found" in r.stderr
    assert r.stderr.count("failed their checksum") == 1
    assert len(r.stderr.splitlines()) < 10
