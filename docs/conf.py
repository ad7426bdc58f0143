# ruff: noqa: INP001

import nuclear_numerov

# -- Project information -----------------------------------------------------

project = "nuclear-numerov"
copyright = "2025, Nuclear Numerov Developers"  # noqa: A001
author = "Nuclear Numerov Developers"

version = nuclear_numerov.__version__  # The short X.Y version, use via |version|
release = version  # The full version, including alpha/beta/rc tags, use via |release|

language = "en"


# -- General configuration ---------------------------------------------------
extensions = [
    "sphinx.ext.autodoc",
    "sphinx.ext.autosummary",
    "sphinx.ext.mathjax",
    "sphinx.ext.viewcode",
    "sphinx.ext.napoleon",
    "sphinx_autodoc_typehints",
]
templates_path = ["_templates"]
exclude_patterns = ["_build", "_doctrees", "Thumbs.db", ".DS_Store"]
source_suffix = ".rst"
master_doc = "index"
pygments_style = "sphinx"
todo_include_todos = False


# -- Options for HTML output -------------------------------------------------
html_theme = "sphinx_rtd_theme"


# -- Options for autosummary -------------------------------------------
autosummary_ignore_module_all = False


# -- Options for autodoc -------------------------------------------
autodoc_class_signature = "mixed"  # combine class and __init__ doc
autodoc_typehints = "both"
