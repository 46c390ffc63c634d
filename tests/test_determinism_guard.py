from pathlib import Path

from tools.determinism_guard import main, scan_paths, scan_source

SNIPPET = """
import os, random, secrets, time
from datetime import datetime

def tick():
    a = time.time()
    b = random.randint(1, 6)
    c = random.Random()
    d = random.Random(42)
    e = secrets.token_hex(4)
    f = os.urandom(8)
    g = hash("seed")
    h = datetime.now()
"""


def test_repository_is_clean():
    assert scan_paths() == []


def test_flags_each_forbidden_call():
    findings = scan_source(SNIPPET, Path("snippet.py"))
    kinds = [f["kind"] for f in findings]
    assert kinds.count("wall_clock_time") == 2
    assert kinds.count("global_rng") == 2
    assert kinds.count("entropy") == 2
    assert kinds.count("unstable_hash") == 1
    assert all(f["file"] == "snippet.py" for f in findings)


def test_syntax_error_is_reported():
    findings = scan_source("def broken(:\n", Path("broken.py"))
    assert [f["kind"] for f in findings] == ["parse_error"]


def test_main_exit_codes(tmp_path, capsys):
    bad = tmp_path / "bad.py"
    bad.write_text("import time\nnow = time.monotonic()\n", encoding="utf-8")
    assert main(["--paths", str(bad)]) == 1
    assert "FAIL: 1 violation" in capsys.readouterr().out
    assert main([]) == 0
