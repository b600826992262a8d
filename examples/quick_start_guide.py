#!/usr/bin/env python3
"""
Quick Start Guide for esvg.

Builds a page-sized drawing, serializes it, parses it back and checks that
the round trip is stable.
"""

import sys
from pathlib import Path

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from esvg import Document, Element, EsvgConfig, Page, parse, to_pretty_string
from esvg.shapes import PathData, TextStyle, circle, create_text, style_stroke


def quick_start_example():
    """Quick start example showing basic usage."""

    print("🚀 QUICK START - esvg")
    print("=" * 45)

    # Step 1: Create a document for a paper size
    print("\n📄 Step 1: Creating an A4 document")
    print("-" * 30)

    page = Page.a4(96)
    document = Document(page)
    print(f"✅ Page is {page.width}x{page.height}px ({page.width_mm:.1f}x{page.height_mm:.1f}mm)")

    # Step 2: Add shapes
    print("\n✏️  Step 2: Adding shapes")
    print("-" * 30)

    layer = Element.group().set_attribute("id", "shapes")
    layer.add_child(circle(page.center(), 50))

    frame = PathData.from_points([
        page.top_left(), page.top_right(), page.bottom_right(), page.bottom_left()
    ]).close().to_path()
    frame.set_attribute("style", style_stroke("black", 1.0, 1.0))
    layer.add_child(frame)

    layer.add_child(create_text("Hello, esvg", page.center_top(), TextStyle("Sans", 24)))
    document.add(layer)
    print(f"✅ Added {len(layer.children)} shapes")

    # Step 3: Serialize
    print("\n💾 Step 3: Serializing")
    print("-" * 30)

    pretty = document.to_pretty_string()
    print(pretty)

    # Step 4: Parse it back
    print("\n🔍 Step 4: Parsing the output")
    print("-" * 30)

    result = parse(pretty, EsvgConfig().override(parser__preserve_whitespace=False))
    print(f"✅ Parsed {result.element_count} elements in {result.processing_time_ms:.2f}ms")
    print(f"📏 Declaration: {result.declaration}")

    stable = to_pretty_string(result.root) == pretty
    print(f"🔁 Pretty output stable through parse: {stable}")

    return stable


if __name__ == "__main__":
    sys.exit(0 if quick_start_example() else 1)
