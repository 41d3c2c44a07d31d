import io
import os
import tempfile
import unittest

from PyPotx.CatalogWriter import CatalogWriter, MemoryCatalogWriter, PoFileWriter
from PyPotx.DialectVersion import DialectVersion
from PyPotx.ExtractedString import StringCandidate, StringPartition
from PyPotx.Helpers.Tests import log_input_expected_error, log_input_expected_result, log_test_name, write_source_tree
from PyPotx.Options import Options
from PyPotx.OutputCatalog import OutputCatalog
from PyPotx.PotxError import CatalogWriteError, ConfigError
from PyPotx.PotxRunner import PipelineState, PotxRunner
from PyPotx.Reporter import Reporter
from PyPotx.StringExtractor import ExtractionResult, StringExtractor

class LineExtractor(StringExtractor):
    """ Treats every non-blank line of a .txt file as a translatable string """
    def Extract(self, path : str, dialect : DialectVersion) -> ExtractionResult:
        if not path.endswith('.txt'):
            return ExtractionResult()

        result = ExtractionResult()
        for number, line in enumerate(self.ReadSource(path).splitlines(), start=1):
            if line.strip():
                result.strings.append(StringCandidate(text=line.strip(), line=number))
        return result

class BrokenExtractor(LineExtractor):
    """ Fails with an unexpected error on files named bad.txt """
    def Extract(self, path : str, dialect : DialectVersion) -> ExtractionResult:
        if os.path.basename(path) == 'bad.txt':
            raise KeyError('boom')
        return super().Extract(path, dialect)

class FailingWriter(CatalogWriter):
    def Write(self, catalog : OutputCatalog) -> str:
        raise CatalogWriteError(f"Unable to write {catalog.filename}", catalog.filename)

class TestPotxRunner(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.root = self.temp_dir.name
        self.writer = MemoryCatalogWriter()
        self.report = io.StringIO()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _create_runner(self, writer : CatalogWriter|None = None, extractor : StringExtractor|None = None, **settings) -> PotxRunner:
        options = Options({ 'mode': 'single', 'api': '8', 'language': None, 'max_threads': 1, 'modules': None, 'files': None, 'folder': self.root }, **settings)
        return PotxRunner(options, extractor=extractor if extractor is not None else LineExtractor(), writer=writer if writer is not None else self.writer, reporter=Reporter(self.report))

    def test_TwoFileScenario(self):
        log_test_name("TwoFileScenario")
        write_source_tree(self.root, { 'a.txt': "Save\n", 'b.txt': "Save\nCancel\n" })

        runner = self._create_runner()
        outcome = runner.Run()

        statistics = (outcome.files_count, outcome.strings_count, len(outcome.diagnostics))
        log_input_expected_result("statistics", (2, 2, 0), statistics)
        self.assertEqual(statistics, (2, 2, 0))
        self.assertTrue(outcome.success)
        self.assertEqual(runner.state, PipelineState.Done)

        general = self.writer["general.pot"]
        self.assertEqual(len(general), 2)

        occurrences = { extracted.text: len(extracted.occurrences) for extracted in general.strings }
        self.assertEqual(occurrences, { "Save": 2, "Cancel": 1 })
        self.assertIn("2     2       0", self.report.getvalue().splitlines())

    def test_InstallerCatalogAlwaysWritten(self):
        log_test_name("InstallerCatalogAlwaysWritten")
        write_source_tree(self.root, { 'a.txt': "Save\n" })

        self._create_runner().Run()

        log_input_expected_result("catalogs", 2, len(self.writer))
        self.assertEqual(len(self.writer), 2)
        installer = self.writer["installer.pot"]
        self.assertEqual(installer.partition, StringPartition.Installer)
        self.assertTrue(installer.is_empty)

    def test_EmptyFolder(self):
        log_test_name("EmptyFolder")
        outcome = self._create_runner().Run()

        statistics = (outcome.files_count, outcome.strings_count, len(outcome.diagnostics))
        log_input_expected_result("statistics", (0, 0, 0), statistics)
        self.assertEqual(statistics, (0, 0, 0))
        self.assertTrue(outcome.success)
        self.assertTrue(self.writer["general.pot"].is_empty)

    def test_MissingModule(self):
        log_test_name("MissingModule")
        write_source_tree(self.root, { 'a.txt': "Save\n" })

        outcome = self._create_runner(modules='missing').Run()

        log_input_expected_result("success", False, outcome.success)
        self.assertFalse(outcome.success)
        self.assertEqual(outcome.files_count, 0)
        self.assertEqual(len(outcome.diagnostics), 1)
        self.assertIn("missing", outcome.errors[0])
        self.assertEqual(outcome.diagnostics[0].source, "missing")
        self.assertIn(" [ERROR] Unable to find module 'missing'", self.report.getvalue().splitlines())

    def test_ModulesTakePrecedenceOverFolder(self):
        log_test_name("ModulesTakePrecedenceOverFolder")
        write_source_tree(self.root, {
            'root.txt': "Home\n",
            'modules/example/example.info.yml': "name: Example\n",
            'modules/example/example.txt': "Save\n",
        })

        outcome = self._create_runner(modules='example').Run()

        texts = [ extracted.text for extracted in self.writer["general.pot"].strings ]
        log_input_expected_result("strings", [ "Save" ], texts)
        self.assertEqual(texts, [ "Save" ])
        self.assertEqual(outcome.files_count, 2)
        self.assertTrue(outcome.success)

    def test_MultipleModeInParallel(self):
        log_test_name("MultipleModeInParallel")
        write_source_tree(self.root, {
            'modules/a/one.txt': "Save\nFirst\n",
            'modules/a/two.txt': "Second\n",
            'modules/b/b.txt': "Save\n",
            'top.txt': "Home\n",
        })

        outcome = self._create_runner(mode='multiple', max_threads=4).Run()
        self.assertTrue(outcome.success)

        keys = sorted(self.writer.catalogs)
        expected = [ "general.pot", "installer.pot", "modules-a.pot", "modules-b.pot" ]
        log_input_expected_result("catalogs", expected, keys)
        self.assertEqual(keys, expected)

        module_a = [ extracted.text for extracted in self.writer["modules-a.pot"].strings ]
        self.assertEqual(module_a, [ "Save", "First", "Second" ])

        save = next(extracted for extracted in self.writer["modules-b.pot"].strings if extracted.text == "Save")
        paths = [ os.path.relpath(path, self.root).replace(os.sep, '/') for path in save.paths ]
        self.assertEqual(paths, [ "modules/a/one.txt", "modules/b/b.txt" ])

    def test_LanguageCatalog(self):
        log_test_name("LanguageCatalog")
        write_source_tree(self.root, { 'a.txt': "Save\n" })

        self._create_runner(language='de').Run()
        self.assertEqual(sorted(self.writer.catalogs), [ "general.de.po", "installer.pot" ])

    def test_ExtractionErrorIsReported(self):
        log_test_name("ExtractionErrorIsReported")
        missing = os.path.join(self.root, 'missing.txt')

        runner = self._create_runner(files=missing)
        outcome = runner.Run()

        log_input_expected_result("success", False, outcome.success)
        self.assertFalse(outcome.success)
        self.assertEqual(outcome.files_count, 1)
        self.assertEqual(len(outcome.diagnostics), 1)
        self.assertEqual(outcome.diagnostics[0].source, missing)
        self.assertEqual(runner.state, PipelineState.Done)

    def test_WriteErrorIsReported(self):
        log_test_name("WriteErrorIsReported")
        write_source_tree(self.root, { 'a.txt': "Save\n" })

        outcome = self._create_runner(writer=FailingWriter()).Run()

        log_input_expected_result("diagnostics", 2, len(outcome.diagnostics))
        self.assertFalse(outcome.success)
        self.assertEqual([ diagnostic.source for diagnostic in outcome.diagnostics ], [ "general.pot", "installer.pot" ])

    def test_InvalidModeStopsBeforeProcessing(self):
        log_test_name("InvalidModeStopsBeforeProcessing")
        with self.assertRaises(ConfigError) as context:
            self._create_runner(mode='everything')

        log_input_expected_error("everything", ConfigError, context.exception)
        self.assertEqual(len(self.writer), 0)
        self.assertEqual(self.report.getvalue(), "")
    def test_EmptyWriterIsUsed(self):
        log_test_name("EmptyWriterIsUsed")
        writer = MemoryCatalogWriter()
        runner = self._create_runner(writer=writer)
        self.assertIs(runner.writer, writer)

        write_source_tree(self.root, { 'a.txt': "Save\n" })
        runner.Run()

        log_input_expected_result("catalogs", [ "general.pot", "installer.pot" ], sorted(writer.catalogs))
        self.assertEqual(sorted(writer.catalogs), [ "general.pot", "installer.pot" ])

    def test_UnexpectedExtractorError(self):
        log_test_name("UnexpectedExtractorError")
        write_source_tree(self.root, { 'a.txt': "Save\n", 'bad.txt': "Broken\n", 'c.txt': "Cancel\n" })
        bad = os.path.join(self.root, 'bad.txt')

        runner = self._create_runner(extractor=BrokenExtractor())
        with self.assertLogs(level='ERROR'):
            outcome = runner.Run()

        log_input_expected_result("success", False, outcome.success)
        self.assertFalse(outcome.success)
        self.assertEqual(runner.state, PipelineState.Done)
        self.assertEqual([ diagnostic.source for diagnostic in outcome.diagnostics ], [ bad ])
        self.assertIn("boom", outcome.errors[0])

        texts = [ extracted.text for extracted in self.writer["general.pot"].strings ]
        self.assertEqual(texts, [ "Save", "Cancel" ])

    def test_RuntimeGroupNamedInstaller(self):
        log_test_name("RuntimeGroupNamedInstaller")
        write_source_tree(self.root, { 'installer/x.txt': "Next\n" })

        outcome = self._create_runner(mode='multiple').Run()
        self.assertTrue(outcome.success)

        keys = sorted(self.writer.catalogs)
        expected = [ "installer-2.pot", "installer.pot" ]
        log_input_expected_result("catalogs", expected, keys)
        self.assertEqual(keys, expected)
        self.assertEqual(self.writer["installer.pot"].partition, StringPartition.Installer)
        self.assertEqual([ extracted.text for extracted in self.writer["installer-2.pot"].strings ], [ "Next" ])

    def test_FileSelectedTwice(self):
        log_test_name("FileSelectedTwice")
        write_source_tree(self.root, { 'a.txt': "Save\n" })
        path = os.path.join(self.root, 'a.txt')

        outcome = self._create_runner(files=f"{path},{path}").Run()

        statistics = (outcome.files_count, outcome.strings_count)
        log_input_expected_result("statistics", (1, 1), statistics)
        self.assertEqual(statistics, (1, 1))

        save = self.writer["general.pot"].strings[0]
        self.assertEqual(len(save.occurrences), 1)

    def test_PoFilesWrittenToOutputDir(self):
        write_source_tree(self.root, {
            'modules/node/node.txt': "Save\n",
            'includes/common.txt': "Welcome\n",
        })

        cases = {
            'multiple': [ "includes.pot", "installer.pot", "modules-node.pot" ],
            'core': [ "general.pot", "installer.pot", "node.pot" ],
        }
        for mode, expected in cases.items():
            with self.subTest(mode=mode), tempfile.TemporaryDirectory() as output_dir:
                log_test_name(f"PoFilesWrittenToOutputDir ({mode})")
                options = Options({ 'mode': mode, 'api': '7', 'language': None, 'max_threads': 1, 'modules': None, 'files': None, 'folder': self.root, 'output_dir': output_dir })
                runner = PotxRunner(options, extractor=LineExtractor(), reporter=Reporter(self.report))
                self.assertIsInstance(runner.writer, PoFileWriter)

                outcome = runner.Run()
                self.assertTrue(outcome.success)

                written = sorted(os.listdir(output_dir))
                log_input_expected_result(mode, expected, written)
                self.assertEqual(written, expected)

                with open(os.path.join(output_dir, expected[-1]), encoding='utf-8') as f:
                    self.assertIn('msgid "Save"', f.read())

if __name__ == '__main__':
    unittest.main()
