"""Embed a document in Rust-style doc comments using a line prefix."""

from prettymark import PrintConfig, prettify

text = prettify("Lorem _ipsum_!\n\nDolor `sit`.", config=PrintConfig(prefix="///"))
print(text)
# /// Lorem *ipsum*!
# ///
# /// Dolor `sit`.
