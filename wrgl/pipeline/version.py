__version__ = "2.0.0"
__git_revision__ = ""
