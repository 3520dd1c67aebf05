"""FoldIt -- scaffolding CLI for Next.js projects."""

__version__ = "1.0.0"
