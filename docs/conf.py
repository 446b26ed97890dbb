# Sphinx configuration for the bizarro docs.
#
# https://www.sphinx-doc.org/en/master/usage/configuration.html

import os
import subprocess
import sys
from pathlib import Path

sys.path.insert(0, os.path.abspath("../"))

# -- turn the tutorial scripts into executed notebooks -----------------------
for script in sorted(Path("examples").glob("*.py")):
    if script.with_suffix(".ipynb").exists():
        continue
    subprocess.run(["jupytext", "--to", "ipynb", "--execute", str(script)], check=True)

# -- project -----------------------------------------------------------------

project = "bizarro"
copyright = "2026, Bizarro Developers"
author = "Bizarro Developers"
release = "0.1.0.dev0"

# -- general -----------------------------------------------------------------

extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "myst_parser",
    "nbsphinx",
]
autosummary_generate = True
autodoc_member_order = "bysource"
exclude_patterns = ["_build", "Thumbs.db", ".DS_Store", "examples/*.py"]

# -- html --------------------------------------------------------------------

html_theme = "sphinx_rtd_theme"
