"""Normalize a Markdown document in one call — zero config."""

from prettymark import prettify

source = """Title
=====

Lorem __ipsum__ dolor `sit` amet!

* one
* two
"""

print(prettify(source))
