"""Tests for the swf_info and swf_tag_dump command-line scripts."""

from __future__ import annotations

import contextlib
import io
import json
import os
import sys
import tempfile
import unittest
from pathlib import Path

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, os.path.dirname(__file__))

import swf_info
import swf_tag_dump
from swf_samples import cws, file_attributes, fws, movie_body, sprite, sprite_movie_body, tag, zws


def _run(main, argv):
    out, err = io.StringIO(), io.StringIO()
    with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
        code = main(argv)
    return code, out.getvalue(), err.getvalue()


class CliTestCase(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def write(self, name: str, data: bytes) -> Path:
        path = self.tmp / name
        path.write_bytes(data)
        return path


class TestSwfInfo(CliTestCase):
    def test_report(self):
        body = movie_body([file_attributes(0x08), sprite(1, 1, tag(1) + tag(0)), tag(1), tag(0)])
        path = self.write("movie.swf", cws(body))
        code, out, err = _run(swf_info.main, [str(path)])
        self.assertEqual(code, 0, err)
        self.assertIn("Signature: CWS", out)
        self.assertIn("Type: Zlib-compressed SWF", out)
        self.assertIn("Stage: 550 x 400 px", out)
        self.assertIn("FPS:   12.00", out)
        self.assertIn("Frames:1", out)
        self.assertIn("Total tags: 4", out)
        self.assertIn("Sprites: 1", out)
        self.assertIn("Sprite tags: 2", out)
        self.assertIn("FileAttributes: useAs3=YES(AS3/AVM2), useNetwork=NO, hasMetadata=NO", out)

    def test_missing_file_attributes(self):
        path = self.write("plain.swf", fws(sprite_movie_body()))
        code, out, _ = _run(swf_info.main, [str(path)])
        self.assertEqual(code, 0)
        self.assertIn("Type: Uncompressed SWF", out)
        self.assertIn("FileAttributes: (not found)", out)

    def test_trace_limit(self):
        path = self.write("movie.swf", fws(sprite_movie_body()))
        _, out, _ = _run(swf_info.main, [str(path), "--trace", "1"])
        self.assertIn("--- Tag scan (first 1) ---", out)
        self.assertIn("   1: tag=39 (DefineSprite), len=8", out)
        self.assertNotIn("s  1: tag=1", out)

    def test_lzma_reported_and_skipped(self):
        path = self.write("lzma.swf", zws(sprite_movie_body()))
        code, out, err = _run(swf_info.main, [str(path)])
        self.assertEqual(code, 1)
        self.assertIn("Signature: ZWS", out)
        self.assertIn("LZMA-compressed SWF (not supported)", out)
        self.assertIn("Tag scan skipped.", out)
        self.assertIn("ERR_UNSUPPORTED_COMPRESSION", err)

    def test_scan_failure_after_header(self):
        path = self.write("huge.swf", fws(sprite_movie_body(), declared=0xFFFFFFFF))
        code, out, err = _run(swf_info.main, [str(path)])
        self.assertEqual(code, 1)
        self.assertIn("Stage: 550 x 400 px", out)
        self.assertIn("Tag scan failed (ERR_SIZE_OUT_OF_BOUNDS", out)

    def test_missing_input(self):
        code, out, err = _run(swf_info.main, [str(self.tmp / "nope.swf")])
        self.assertEqual(code, 1)
        self.assertIn("ERROR: ERR_IO", out)
        self.assertIn("[error]", err)

    def test_directory_and_json(self):
        folder = self.tmp / "movies"
        folder.mkdir()
        (folder / "b.SWF").write_bytes(fws(sprite_movie_body()))
        (folder / "a.swf").write_bytes(cws(sprite_movie_body()))
        (folder / "notes.txt").write_text("not a movie", encoding="utf-8")
        report = self.tmp / "out" / "report.json"
        traces = self.tmp / "traces"

        code, out, _ = _run(
            swf_info.main,
            [str(folder), "--json", str(report), "--trace-out", str(traces)],
        )
        self.assertEqual(code, 0)
        data = json.loads(report.read_text(encoding="utf-8"))
        self.assertEqual([Path(item["path"]).name for item in data], ["a.swf", "b.SWF"])
        self.assertEqual(data[0]["container"]["signature"], "CWS")
        self.assertEqual(data[0]["header"]["stage"]["xmax"], 11000)
        self.assertEqual(data[1]["summary"]["sprite_tags"], 2)
        self.assertEqual(data[1]["errors"], [])
        self.assertTrue((traces / "a.trace.txt").exists())
        self.assertIn("DefineSprite", (traces / "b.trace.txt").read_text(encoding="utf-8"))

    def test_empty_directory(self):
        code, _, err = _run(swf_info.main, [str(self.tmp)])
        self.assertEqual(code, 1)
        self.assertIn("[warn]", err)

    def test_iter_swf_files_keeps_explicit_files(self):
        path = self.tmp / "movie.bin"
        self.assertEqual(list(swf_info.iter_swf_files([path])), [path])


class TestSwfTagDump(CliTestCase):
    def test_root_records(self):
        path = self.write("movie.swf", cws(sprite_movie_body()))
        code, out, _ = _run(swf_tag_dump.main, [str(path)])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 3)
        self.assertIn("off=0x000015", lines[0])
        self.assertIn("name=DefineSprite", lines[0])

    def test_sprites_and_bytes(self):
        path = self.write("movie.swf", fws(sprite_movie_body()))
        code, out, _ = _run(swf_tag_dump.main, [str(path), "--sprites", "--bytes"])
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(len(lines), 5)
        self.assertTrue(lines[1].startswith("    off="))
        self.assertIn("bytes=01 00 01 00", lines[0])

    def test_limit(self):
        path = self.write("movie.swf", fws(sprite_movie_body()))
        _, out, _ = _run(swf_tag_dump.main, [str(path), "--sprites", "--limit", "2"])
        self.assertEqual(len(out.splitlines()), 2)

    def test_error(self):
        path = self.write("lzma.swf", zws(sprite_movie_body()))
        code, _, err = _run(swf_tag_dump.main, [str(path)])
        self.assertEqual(code, 1)
        self.assertIn("ERR_UNSUPPORTED_COMPRESSION", err)

    def test_no_records(self):
        path = self.write("empty.swf", fws(movie_body(b"")))
        code, _, err = _run(swf_tag_dump.main, [str(path)])
        self.assertEqual(code, 1)
        self.assertIn("No tag records", err)


if __name__ == "__main__":
    unittest.main()
