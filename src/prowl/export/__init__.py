"""Export layer — write the generated route list."""

from prowl.export.routes import ExportedFile, dump_routes, write_routes

__all__ = ["ExportedFile", "dump_routes", "write_routes"]
