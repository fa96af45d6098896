"""Report options and the checks that keep them consistent."""
from dataclasses import dataclass
from typing import List, Optional

from ..errors import ConflictingFlagsError, DependentFlagMissingError


@dataclass
class ReportOptions:
    """Options controlling which entries are reported and how they are printed.

    Output format selectors (``format``, ``json``, ``csv``, ``quiet``,
    ``markdown``, ``duration_float`` and ``duration_formatted``) are mutually
    exclusive; with none of them set the report is printed as a table.
    """

    billable: bool = False
    not_billable: bool = False
    client: str = ""
    project: str = ""

    format: str = ""
    json: bool = False
    csv: bool = False
    quiet: bool = False
    markdown: bool = False
    duration_float: bool = False
    duration_formatted: bool = False

    show_tasks: bool = False
    show_total_duration: bool = False
    time_format: Optional[str] = None

    def output_flags(self) -> List[str]:
        """Names of the output format flags that are set."""
        selected = [
            ("format", bool(self.format)),
            ("json", self.json),
            ("csv", self.csv),
            ("quiet", self.quiet),
            ("md", self.markdown),
            ("duration-float", self.duration_float),
            ("duration-formatted", self.duration_formatted),
        ]
        return [name for name, is_set in selected if is_set]

    def check(self) -> None:
        """Validate flag combinations.

        Raises:
            ConflictingFlagsError: If billable and not-billable are both set,
                or more than one output format was selected
            DependentFlagMissingError: If client is set without project
        """
        if self.billable and self.not_billable:
            raise ConflictingFlagsError("billable", "not-billable")

        if self.client and not self.project:
            raise DependentFlagMissingError("client", "project")

        outputs = self.output_flags()
        if len(outputs) > 1:
            raise ConflictingFlagsError(*outputs)


def check(options: ReportOptions) -> None:
    """Validate ``options``; see :meth:`ReportOptions.check`."""
    options.check()
