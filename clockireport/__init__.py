"""
clockiReport: A CLI tool for printing Clockify time entries in many formats.

- Fetches time entries from the Clockify API, or reads them from a JSON export
- Prints them as a table, CSV, JSON, Markdown or through a custom template
- Can print only the IDs or only the total duration
- Can be used as a CLI (via `python -m clockireport` or `clockireport` if installed as a package)
"""

__version__ = "0.3.0"
