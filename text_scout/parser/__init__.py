"""text_scout.parser: HTML parsing capability."""
