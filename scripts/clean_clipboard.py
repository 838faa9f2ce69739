#!/usr/bin/env python3
"""
Functional check of the cleaning pipeline - prints the cleaned markup.

Reads an HTML file, or the current clipboard when no file is given, and
runs it through the full MarkupPipeline:
- Classification (not markup, code snippet, clean, vendor, generic)
- Vendor Strip (Office exports only)
- Heading and bullet detection
- Attribute and tag allow-listing
- Block formatting and whitespace normalization

Usage:
    python scripts/clean_clipboard.py [FILE] [--save]

Example:
    python scripts/clean_clipboard.py tests/samples/word_export.html
    python scripts/clean_clipboard.py --save
"""
import asyncio
import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from paste_cleaner.clipboard import ClipboardReader, SourceUnavailable
from paste_cleaner.diagnostics import DiagnosticsWriter
from paste_cleaner.pipeline import content_pipeline


async def clean(path: str | None, save: bool = False) -> None:
    """Clean a file or the clipboard and print the result."""
    print(f"\n{'=' * 60}")
    print(f"Cleaning: {path or 'clipboard'}")
    print(f"{'=' * 60}\n")

    if path:
        raw = Path(path).read_text(encoding="utf-8")
    else:
        try:
            content = await ClipboardReader().read()
        except SourceUnavailable as e:
            print(f"Clipboard unavailable: {e}")
            return
        print(f"Clipboard flavour: {content.source}")
        raw = content.best

    result = content_pipeline.process(raw)

    if not result.success:
        print(f"Cleaning failed: {result.error}")
        return

    print("Statistics:")
    print(f"   - Classification: {result.classification.value}")
    print(f"   - Input length: {len(raw)} characters")
    print(f"   - Output length: {len(result.html)} characters")
    print(f"   - Anchors: {result.anchors_in} in, {result.anchors_out} out")
    if result.steps_applied:
        print(f"   - Pipeline steps: {', '.join(result.steps_applied)}")

    if save:
        writer = DiagnosticsWriter(enabled=True)
        raw_path = writer.save("raw", raw)
        cleaned_path = writer.save("cleaned", result.html)
        print(f"\nSaved: {raw_path}")
        print(f"Saved: {cleaned_path}")
    else:
        print(f"\n{'-' * 60}")
        print("CLEANED MARKUP:")
        print(f"{'-' * 60}\n")
        print(result.html)


def main():
    args = sys.argv[1:]
    save = "--save" in args
    args = [a for a in args if a != "--save"]
    asyncio.run(clean(args[0] if args else None, save=save))


if __name__ == "__main__":
    main()
