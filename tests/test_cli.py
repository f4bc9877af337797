"""
CLI 测试：init / generate / routes
"""
import os
import subprocess
import sys
from pathlib import Path
import xml.etree.ElementTree as ET

from nook_sitemap.cli import main
from nook_sitemap.config import load_config

NOW = "2024-01-01T12:00:00.000Z"
SRC_DIR = Path(__file__).parent.parent / "src"


def test_init_creates_loadable_config(tmp_path):
    target = tmp_path / "nook.config.yml"
    assert main(["init", "-p", str(target)]) == 0
    config = load_config(target)
    assert len(config.routes) == 9
    assert config.site.locales == ["en", "es", "ja", "sv", "uk"]


def test_init_refuses_overwrite(tmp_path):
    target = tmp_path / "nook.config.yml"
    target.write_text("site: {}\n", encoding="utf-8")
    assert main(["init", "-p", str(target)]) == 1
    assert target.read_text(encoding="utf-8") == "site: {}\n"
    assert main(["init", "-p", str(target), "--force"]) == 0


def test_generate_writes_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    output = tmp_path / "out" / "sitemap.xml"
    assert main(["generate", "-o", str(output), "--now", NOW]) == 0
    xml_text = output.read_text(encoding="utf-8")
    assert xml_text.count("<url>") == 45
    assert f"<lastmod>{NOW}</lastmod>" in xml_text


def test_generate_from_config(tmp_path):
    config_path = tmp_path / "nook.config.yml"
    config_path.write_text(
        "site:\n"
        "  locales: [en, es]\n"
        "routes:\n"
        "  - {path: /, priority: 1.0, changefreq: daily}\n"
        "  - {path: /chat, priority: 1.0, changefreq: weekly}\n"
        f"output:\n  sitemap_xml: {tmp_path / 'sitemap.xml'}\n",
        encoding="utf-8",
    )
    assert main(["generate", "-c", str(config_path), "--now", NOW]) == 0
    xml_text = (tmp_path / "sitemap.xml").read_text(encoding="utf-8")
    assert xml_text.count("<url>") == 4
    assert "<loc>https://nook.software/es/chat/</loc>" in xml_text


def test_generate_stdout_dev(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["generate", "--stdout", "--dev", "--now", NOW]) == 0
    captured = capsys.readouterr()
    # stdout is the document and nothing else; logging goes to stderr
    root = ET.fromstring(captured.out.encode("utf-8"))
    assert len(root) == 45
    assert "<loc>http://localhost:5173</loc>" in captured.out
    assert "[INFO]" not in captured.out
    assert "[INFO] Generated sitemap with 45 URLs" in captured.err
    assert not (tmp_path / "sitemap.xml").exists()


def test_generate_stdout_restores_console(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["generate", "--stdout", "--now", NOW]) == 0
    capsys.readouterr()
    assert main(["generate", "-o", str(tmp_path / "sitemap.xml"), "--now", NOW]) == 0
    assert "[INFO] Wrote sitemap.xml" in capsys.readouterr().out


def test_generate_stdout_is_well_formed_xml(tmp_path):
    """重定向 stdout 得到的文件必须是合法 XML"""
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(SRC_DIR), env.get("PYTHONPATH")) if p
    )
    result = subprocess.run(
        [sys.executable, "-m", "nook_sitemap", "generate", "--stdout", "--now", NOW],
        cwd=tmp_path,
        env=env,
        capture_output=True,
        text=True,
        check=True,
    )
    root = ET.fromstring(result.stdout.encode("utf-8"))
    assert root.tag.endswith("urlset")
    assert len(root) == 45
    assert "not found, using built-in routes" in result.stderr


def test_generate_malformed_config(tmp_path, capsys):
    config_path = tmp_path / "nook.config.yml"
    config_path.write_text("site: [unclosed\n", encoding="utf-8")
    assert main(["generate", "-c", str(config_path), "--stdout"]) == 1
    captured = capsys.readouterr()
    assert "[ERROR] Invalid YAML" in captured.err
    assert captured.out == ""


def test_generate_dry_run(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["generate", "--dry-run"]) == 0
    out = capsys.readouterr().out
    assert "= 45 URLs" in out
    assert not Path(tmp_path / "sitemap.xml").exists()


def test_generate_missing_explicit_config(tmp_path, capsys):
    assert main(["generate", "-c", str(tmp_path / "missing.yml")]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_generate_bad_now(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["generate", "--stdout", "--now", "yesterday"]) == 1
    assert "--now" in capsys.readouterr().err


def test_routes_listing(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main(["routes"]) == 0
    out = capsys.readouterr().out
    assert "/language  priority=0.8 changefreq=monthly" in out
    assert "[es] https://nook.software/es/" in out
