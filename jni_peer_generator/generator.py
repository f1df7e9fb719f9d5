"""
Main peer generator orchestration
"""

from pathlib import Path

from .code_generators import CodeGenerator, OutputBuilder
from .config import GeneratorConfig
from .errors import ModelError
from .models import ManagedClass
from .type_mapper import TypeMapper
from .writer import WriteEvent, write_if_changed


class PeerGenerator:
    """Main orchestrator for generating managed peers from a class model"""

    def __init__(self, config: GeneratorConfig = None):
        self.config = config or GeneratorConfig()
        self.type_mapper = TypeMapper()
        self.code_generator = CodeGenerator(self.config, self.type_mapper)

        # file path -> what the writer did with it during the last run
        self.events: dict[str, WriteEvent] = {}

    def generate_class(self, cls: ManagedClass) -> dict[str, str]:
        """Build the header and source file for one tagged class"""
        header_name = self.code_generator.header_file_name(cls)
        source_name = self.code_generator.source_file_name(cls)

        header = OutputBuilder.build_header(
            self.config.includes,
            self.code_generator.generate_declaration(cls),
        )
        source = OutputBuilder.build_source(
            header_name,
            self.code_generator.generate_definition(cls),
            pch=self.config.pch,
            once_guard=self.config.explicit_once_guard,
        )
        return {header_name: header, source_name: source}

    def generate(self, classes: list[ManagedClass]) -> dict[str, str]:
        """Generate peers for every tagged class

        Returns a dict of file name -> content. When an output directory is
        configured each file is also written there, skipping unchanged ones.
        """
        self.events.clear()
        output = {}

        for cls in classes:
            if not cls.is_tagged:
                continue

            if self.config.verbose:
                print(f"Processing: {cls.qualified_name}")

            for file_name, content in self.generate_class(cls).items():
                if file_name in output:
                    raise ModelError(f"{cls.qualified_name} generates {file_name}, which another class already generated")
                data = OutputBuilder.encode(content, file_name)
                if self.config.output_dir is not None:
                    self._write(file_name, data)
                output[file_name] = content

        return output

    def _write(self, file_name: str, data: bytes):
        path = Path(self.config.output_dir) / file_name
        event = write_if_changed(path, data, force=self.config.force, verbose=self.config.verbose)
        self.events[str(path)] = event

    @property
    def written(self) -> list[str]:
        """Paths actually written during the last run"""
        return [path for path, event in self.events.items() if event.wrote]
