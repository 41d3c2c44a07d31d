from concurrent.futures import ThreadPoolExecutor
from enum import Enum
import logging
from typing import Iterable

from PyPotx.BuildMode import BuildMode
from PyPotx.CatalogBuilder import CatalogBuilder
from PyPotx.CatalogWriter import CatalogWriter, PoFileWriter
from PyPotx.DrupalStringExtractor import DrupalStringExtractor
from PyPotx.ExtractedString import StringPartition
from PyPotx.ExtractionContext import ExtractionContext
from PyPotx.Helpers.Localization import _
from PyPotx.ModulePathResolver import ModulePathResolver
from PyPotx.Options import Options
from PyPotx.OutputCatalog import AssignUniqueFilenames, OutputCatalog
from PyPotx.PotxError import ExtractionError, PotxError
from PyPotx.Reporter import ReportOutcome, Reporter
from PyPotx.SourceLocator import SourceFile, SourceLocator
from PyPotx.StringExtractor import ExtractionResult, StringExtractor

class PipelineState(Enum):
    Init = 'init'
    Discover = 'discover'
    Extract = 'extract'
    BuildRuntime = 'build_runtime'
    BuildInstaller = 'build_installer'
    Write = 'write'
    Report = 'report'
    Done = 'done'

ExtractionOutput = tuple[SourceFile, ExtractionResult|None, PotxError|None]

class PotxRunner:
    """
    Runs the extraction pipeline: discover files, extract strings from each one,
    build the runtime and installer catalogs, write them and report the outcome.

    Problems with individual modules, files or catalogs are collected as diagnostics
    and do not stop the run. Invalid settings raise ConfigError when the runner is created.
    """
    def __init__(self, options : Options, extractor : StringExtractor|None = None, writer : CatalogWriter|None = None,
                 module_resolver : ModulePathResolver|None = None, reporter : Reporter|None = None):
        self.options : Options = options
        self.build_mode, self.dialect, self.language = options.Validate()
        self.max_threads : int = options.max_threads

        self.extractor : StringExtractor = extractor if extractor is not None else DrupalStringExtractor()
        self.writer : CatalogWriter = writer if writer is not None else PoFileWriter(options.output_dir)
        self.module_resolver : ModulePathResolver = module_resolver if module_resolver is not None else ModulePathResolver(options.scan_root)
        self.reporter : Reporter = reporter if reporter is not None else Reporter()
        self.state : PipelineState = PipelineState.Init

    def Run(self) -> ReportOutcome:
        """
        Execute a complete run. Always reaches the Done state; the outcome reports failure if there were diagnostics.
        """
        self.state = PipelineState.Init
        context = ExtractionContext()

        logging.info(_("Extracting strings using API version {api} in {mode} mode").format(api=int(self.dialect), mode=self.build_mode.value))

        self._set_state(PipelineState.Discover)
        context.files = self.DiscoverFiles(context)

        self._set_state(PipelineState.Extract)
        self.ExtractStrings(context)

        builder = CatalogBuilder(context.catalog, context.versions, self.dialect, base_path=self.options.scan_root, project_name=self.options.project_name)

        self._set_state(PipelineState.BuildRuntime)
        runtime_catalogs : list[OutputCatalog] = builder.Build(StringPartition.Runtime, self.build_mode, 'general', self.language)

        self._set_state(PipelineState.BuildInstaller)
        installer_catalogs : list[OutputCatalog] = builder.Build(StringPartition.Installer, BuildMode.Single, 'installer')

        # The installer catalog keeps its name if a runtime group has the same key
        AssignUniqueFilenames(installer_catalogs + runtime_catalogs)
        catalogs = runtime_catalogs + installer_catalogs

        self._set_state(PipelineState.Write)
        self.WriteCatalogs(context, catalogs)

        self._set_state(PipelineState.Report)
        files_count = len({ source_file.path for source_file in context.files })
        outcome = self.reporter.Finalize(files_count, context.catalog.Count(StringPartition.Runtime), context.diagnostics)

        self._set_state(PipelineState.Done)
        return outcome

    def DiscoverFiles(self, context : ExtractionContext) -> list[SourceFile]:
        locator = SourceLocator(self.module_resolver, report_error=lambda error: context.AddError(error, source=error.name))
        files = locator.Resolve(self.options.selection)
        logging.debug(f"Discovered {len(files)} files")
        return files

    def ExtractStrings(self, context : ExtractionContext):
        """
        Run the extractor on every file. Extraction may run in parallel but results are merged in discovery order.
        """
        if self.max_threads > 1 and len(context.files) > 1:
            with ThreadPoolExecutor(max_workers=self.max_threads) as executor:
                self._merge_results(context, executor.map(self._extract_file, context.files))
        else:
            self._merge_results(context, map(self._extract_file, context.files))

    def WriteCatalogs(self, context : ExtractionContext, catalogs : list[OutputCatalog]):
        for catalog in catalogs:
            try:
                self.writer.Write(catalog)

            except (PotxError, OSError) as e:
                logging.error(str(e))
                context.AddError(e, source=catalog.filename)

    def _extract_file(self, source_file : SourceFile) -> ExtractionOutput:
        logging.info(_("Processing {file}...").format(file=source_file.path))
        try:
            return source_file, self.extractor.Extract(source_file.path, self.dialect), None

        except PotxError as e:
            return source_file, None, e
        except (OSError, ValueError) as e:
            return source_file, None, ExtractionError(_("Unable to extract strings from {path}: {error}").format(path=source_file.path, error=str(e)), source_file.path, e)
        except Exception as e:
            logging.exception(f"Unexpected error extracting strings from {source_file.path}")
            return source_file, None, ExtractionError(_("Unexpected error extracting strings from {path}: {error}").format(path=source_file.path, error=repr(e)), source_file.path, e)

    def _merge_results(self, context : ExtractionContext, results : Iterable[ExtractionOutput]):
        merged : set[str] = set()
        for source_file, result, error in results:
            if error is not None:
                logging.warning(str(error))
                context.AddError(error, source=source_file.path)
                continue

            if result is None:
                continue

            # A file selected more than once replaces its earlier strings
            if source_file.path in merged:
                context.catalog.RemoveFile(source_file.path)
            merged.add(source_file.path)

            context.catalog.RecordCandidates(source_file.path, result.strings)
            context.versions.RecordVersion(source_file.path, result.version)

            for warning in result.warnings:
                context.AddDiagnostic(warning, source=source_file.path)

    def _set_state(self, state : PipelineState):
        logging.debug(f"Pipeline state: {self.state.value} -> {state.value}")
        self.state = state
