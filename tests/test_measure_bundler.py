import gzip
import io
import tempfile
import unittest
from pathlib import Path
from typing import List
from unittest import mock

from rich.console import Console

from measure import BundlerMeasurer, MeasureError, MeasureOptions
from measure.bundler import META_FILE_NAME, gzip_size
from measure.core_cmd import CmdResult, which_or_raise


class TestFileMode(unittest.IsolatedAsyncioTestCase):
    async def test_concatenates_files_and_gzips(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            a = root / "a.js"
            b = root / "b.js"
            a.write_bytes(b"var a = 1;\n" * 50)
            b.write_bytes(b"var b = 2;\n")

            measurer = BundlerMeasurer(root)
            report = await measurer.measure([str(a), str(b)], MeasureOptions(webpack=False))

            data = a.read_bytes() + b.read_bytes()
            self.assertEqual(len(data), report.parsed)
            self.assertEqual(len(gzip.compress(data, compresslevel=9)), report.gzip)
            self.assertLess(report.gzip, report.parsed)

    async def test_gzip_disabled_reports_parsed_only(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            root = Path(td)
            (root / "a.js").write_bytes(b"abc")
            report = await BundlerMeasurer(root).measure(
                [str(root / "a.js")], MeasureOptions(webpack=False, gzip=False)
            )
            self.assertEqual(3, report.parsed)
            self.assertIsNone(report.gzip)

    async def test_missing_file_is_a_measure_error(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(MeasureError):
                await BundlerMeasurer(Path(td)).measure(
                    [str(Path(td) / "nope.js")], MeasureOptions(webpack=False)
                )


class TestEsbuildMode(unittest.IsolatedAsyncioTestCase):
    def setUp(self) -> None:
        self._td = tempfile.TemporaryDirectory()
        self.root = Path(self._td.name)
        self.commands: List[List[str]] = []
        self.err = Console(file=io.StringIO(), highlight=False, soft_wrap=True)

    def tearDown(self) -> None:
        self._td.cleanup()

    async def fake_run_cmd(self, cmd, **kwargs) -> CmdResult:
        self.commands.append(list(cmd))
        out_dir = Path(next(a for a in cmd if a.startswith("--outdir=")).split("=", 1)[1])
        out_dir.mkdir(parents=True)
        (out_dir / "a.js").write_bytes(b"x" * 40)
        (out_dir / "a.js.map").write_bytes(b"ignored")
        return CmdResult(0, 0.0, " ".join(cmd), "", "  out/a.js  40b  100.0% [x]\n")

    async def measure(self, options: MeasureOptions):
        with mock.patch("measure.bundler.which_or_raise", return_value="esbuild"), mock.patch(
            "measure.bundler.run_cmd", side_effect=self.fake_run_cmd
        ):
            return await BundlerMeasurer(self.root, err_console=self.err).measure(
                ["/src/a.js"], options
            )

    async def test_bundles_minified_with_externals(self) -> None:
        report = await self.measure(MeasureOptions(bundle="demo", ignore=("react",)))

        cmd = self.commands[0]
        self.assertEqual(["esbuild", "/src/a.js", "--bundle", "--minify"], cmd[:4])
        self.assertIn("--external:react", cmd)
        self.assertIn("--external:demo", cmd)
        self.assertNotIn("--analyze", cmd)
        self.assertEqual("", self.err.file.getvalue())
        self.assertEqual(40, report.parsed)
        self.assertEqual(gzip_size(b"x" * 40), report.gzip)

    async def test_server_analyzer_prints_breakdown(self) -> None:
        await self.measure(MeasureOptions(analyzer="server"))
        self.assertIn("--analyze", self.commands[0])
        self.assertEqual("  out/a.js  40b  100.0% [x]\n", self.err.file.getvalue())

    async def test_static_analyzer_writes_metafile(self) -> None:
        await self.measure(MeasureOptions(analyzer="static"))
        self.assertIn(f"--metafile={self.root / META_FILE_NAME}", self.commands[0])

    async def test_bundler_failure_carries_its_output(self) -> None:
        async def failing(cmd, **kwargs) -> CmdResult:
            return CmdResult(1, 0.0, " ".join(cmd), "", '✘ [ERROR] Could not resolve "lodash"')

        with mock.patch("measure.bundler.which_or_raise", return_value="esbuild"), mock.patch(
            "measure.bundler.run_cmd", side_effect=failing
        ):
            with self.assertRaises(MeasureError) as ctx:
                await BundlerMeasurer(self.root).measure(["/src/a.js"], MeasureOptions())
        self.assertIn('Could not resolve "lodash"', str(ctx.exception))


class TestWhichOrRaise(unittest.TestCase):
    def test_falls_back_to_local_bin(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            local = Path(td) / "tool"
            local.write_text("#!/bin/sh\n", encoding="utf-8")
            local.chmod(0o755)
            with mock.patch("measure.core_cmd.shutil.which", return_value=None):
                self.assertEqual(str(local), which_or_raise("tool", fallbacks=[local]))

    def test_raises_when_missing(self) -> None:
        with mock.patch("measure.core_cmd.shutil.which", return_value=None):
            with self.assertRaises(FileNotFoundError):
                which_or_raise("definitely-not-installed", fallbacks=[])


if __name__ == "__main__":
    unittest.main()
