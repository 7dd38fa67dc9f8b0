"""Table section checks."""

from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import HEADER_SEPARATOR_RE, column_count, row_cells, split_lines, table_rows
from .base import Finding, SectionChecker

FEATURE_HEADER_TERMS = ("feature", "aspect", "attribute", "property")
FEATURE_FIRST_COLUMN_TERMS = ("feature", "aspect", "attribute")
PLACEHOLDER_CELLS = ("", "-", "...")


def _line_index(answer: str, text: str) -> int | None:
    for index, line in enumerate(split_lines(answer)):
        if text in line:
            return index
    return None


class TableChecker(SectionChecker):
    """Validates pipe-delimited markdown tables.

    Every line containing two pipes is treated as a table row, so a table is
    assumed to be the only pipe-heavy content in the answer.
    """

    FORMAT = SectionFormat.TABLE

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        rows = [row for row in table_rows(answer) if row.strip()]

        if not rows:
            if section.required:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-table-required",
                        severity=Severity.ERROR,
                        message=f"{section.name} section requires a markdown table",
                        fix="Add a markdown table with proper headers and data rows",
                        search_text=section.name,
                    )
                )
            return findings

        header = rows[0]
        header_line = _line_index(answer, header)
        header_columns = column_count(header)

        min_columns = section.constraint(ConstraintKind.MIN_COLUMNS)
        if min_columns is not None and header_columns < min_columns:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-min-columns",
                    severity=Severity.ERROR,
                    message=f"Table must have at least {min_columns} columns, found {header_columns}",
                    fix=f"Add more columns to meet the minimum requirement of {min_columns}",
                    search_text=header,
                    line_hint=header_line,
                )
            )

        if section.flag(ConstraintKind.HAS_HEADERS) and not HEADER_SEPARATOR_RE.search(answer):
            findings.append(
                Finding(
                    rule=f"{pattern_id}-table-headers",
                    severity=Severity.ERROR,
                    message="Table is missing header separator row",
                    fix="Add a header separator row like |---|---|---|",
                    search_text=header,
                    line_hint=header_line,
                )
            )

        if len(rows) >= 2 and column_count(rows[1]) != header_columns:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-table-alignment",
                    severity=Severity.WARNING,
                    message="Table header and separator rows have different column counts",
                    fix="Ensure all table rows have the same number of columns",
                    search_text=header,
                    line_hint=header_line,
                )
            )

        findings.extend(self._check_comparison(rows, section, pattern_id))
        return findings

    def _check_comparison(self, rows: list[str], section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        header = rows[0]
        header_columns = column_count(header)

        if section.flag(ConstraintKind.REQUIRES_FEATURE_COLUMN):
            if not any(term in header.lower() for term in FEATURE_HEADER_TERMS):
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-feature-column",
                        severity=Severity.WARNING,
                        message='Comparison table should include a "Feature" or "Aspect" column',
                        fix='Add a column header like "Feature", "Aspect", or "Attribute" to describe what is being compared',
                        search_text=header,
                    )
                )

        if section.flag(ConstraintKind.COMPARISON_FORMAT) and header_columns >= 3:
            columns = [c for c in row_cells(header) if c]
            first = columns[0].lower() if columns else ""
            if len(columns) >= 3 and not any(term in first for term in FEATURE_FIRST_COLUMN_TERMS):
                if header_columns == 3:
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-comparison-format-2",
                            severity=Severity.INFO,
                            message="For 2-item comparison, use format: | Feature | Item A | Item B |",
                            fix='Consider using "Feature" as the first column header for better clarity',
                        )
                    )
                elif len(columns) >= 4:
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-comparison-format-multi",
                            severity=Severity.INFO,
                            message="For multi-item comparison, use format: | Feature | Item 1 | Item 2 | Item 3 |",
                            fix='Consider using "Feature" as the first column header for better clarity',
                        )
                    )

        # Rows 0 and 1 are header and separator
        data_rows = rows[2:]

        if section.flag(ConstraintKind.CONSISTENT_ROWS):
            for number, row in enumerate(data_rows, start=1):
                row_columns = column_count(row)
                if row_columns != header_columns:
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-inconsistent-rows",
                            severity=Severity.ERROR,
                            message=f"Table row {number} has {row_columns} columns, expected {header_columns}",
                            fix=f"Ensure all table rows have exactly {header_columns} columns",
                            search_text=row,
                        )
                    )

        if section.flag(ConstraintKind.NO_EMPTY_CELLS):
            for number, row in enumerate(data_rows, start=1):
                if any(cell in PLACEHOLDER_CELLS for cell in row_cells(row)):
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-empty-cells",
                            severity=Severity.WARNING,
                            message=f"Table has empty or placeholder cells in row {number}",
                            fix='Fill in all table cells with meaningful content, avoid using "-" or "..." as placeholders',
                            search_text=row,
                        )
                    )

        min_rows = section.constraint(ConstraintKind.MIN_DATA_ROWS)
        if min_rows is not None and len(data_rows) < min_rows:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-min-data-rows",
                    severity=Severity.WARNING,
                    message=f"Table has {len(data_rows)} data rows, minimum required is {min_rows}",
                    fix=f"Add more comparison rows to provide at least {min_rows} data points",
                )
            )

        return findings
