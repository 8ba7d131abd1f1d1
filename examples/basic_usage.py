"""
Basic usage examples for axlocator on macOS.
"""

from axlocator import SearchEngine, load_search_config_from_env
from axlocator.exceptions import AXLocatorError
from axlocator.tools.accessibility.macos import MacOSApplicationResolver
from axlocator.utils.logging import setup_logging


def example_find_button(engine: SearchEngine):
    """
    Example: find the Save button in the front TextEdit window.
    """
    print("\n" + "=" * 60)
    print("Example 1: Find a button")
    print("=" * 60)

    locator = {
        "criteria": [
            {"attribute": "role", "value": "Button"},
            {"attribute": "title", "value": "Save"},
        ],
        "rootElementPathHint": [{"attribute": "role", "value": "Window", "depth": 1}],
    }
    root = engine.resolve_application("TextEdit")
    result = engine.search(root, locator)
    print(f"\nFound: {engine.accessor.describe(result.element)}")
    print(f"Visited: {result.visited_count} element(s)")


def example_collect(engine: SearchEngine):
    """
    Example: list every button in Calculator.
    """
    print("\n" + "=" * 60)
    print("Example 2: Collect buttons")
    print("=" * 60)

    root = engine.resolve_application("Calculator")
    buttons = engine.collect_elements(root, criteria=[{"attribute": "role", "value": "Button"}])
    for button in buttons:
        print(f"  {engine.accessor.describe(button)}")


def example_batch(engine: SearchEngine):
    """
    Example: several queries in one batch.
    """
    print("\n" + "=" * 60)
    print("Example 3: Batch")
    print("=" * 60)

    results = engine.run_batch(
        [
            {"id": "windows", "command": "collect", "application": "Finder",
             "criteria": [{"attribute": "role", "value": "Window"}], "max_depth": 1},
            {"id": "missing", "command": "find", "application": "Finder",
             "locator": {"criteria": [{"attribute": "title", "value": "No Such Button"}]}},
        ]
    )
    for result in results:
        print(f"  {result.format_summary()}")


def main():
    """
    Run all examples.
    """
    setup_logging(verbose=False)
    engine = SearchEngine(
        config=load_search_config_from_env(),
        application_resolver=MacOSApplicationResolver(),
    )

    print("\naxlocator - Examples")
    print("=" * 60)

    for example in (example_find_button, example_collect, example_batch):
        try:
            example(engine)
        except AXLocatorError as e:
            print(f"\n{type(e).__name__}: {e}")


if __name__ == "__main__":
    main()
