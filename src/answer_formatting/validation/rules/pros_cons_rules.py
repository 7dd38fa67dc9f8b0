"""Pros/cons section checks."""

from ...models import ConstraintKind, Section, SectionFormat, Severity
from ..scanners import HeadingSection, bullet_items, find_heading, has_bullets
from .base import Finding, SectionChecker

PROS_TITLES = r"Advantages?|Pros?|Benefits?"
CONS_TITLES = r"Disadvantages?|Cons?|Drawbacks?|Limitations?"
MAX_BALANCE_RATIO = 3


class ProsConsChecker(SectionChecker):
    """Validates paired advantages/disadvantages sections.

    A section's content runs from its heading to the next heading of any level.
    """

    FORMAT = SectionFormat.PROS_CONS

    def check(self, answer: str, section: Section, pattern_id: str) -> list[Finding]:
        findings = []
        pros = find_heading(answer, PROS_TITLES)
        cons = find_heading(answer, CONS_TITLES)
        pros_items = bullet_items(pros.content) if pros else []
        cons_items = bullet_items(cons.content) if cons else []

        if section.constraint(ConstraintKind.REQUIRED_SECTIONS):
            findings.extend(self._check_required(pros, cons, pattern_id))
        if section.flag(ConstraintKind.SECTION_BALANCE):
            findings.extend(self._check_balance(pros_items, cons_items, pattern_id, pros is not None, cons is not None))
        if section.flag(ConstraintKind.BULLETED_LISTS):
            for label, heading in (("Advantages", pros), ("Disadvantages", cons)):
                if heading and heading.content and not has_bullets(heading.content):
                    findings.append(
                        Finding(
                            rule=f"{pattern_id}-list-format",
                            severity=Severity.WARNING,
                            message=f"{label} section should use bulleted lists",
                            fix="Format items as bulleted lists using - or * bullets",
                            search_text=heading.title,
                            line_hint=heading.line_index,
                        )
                    )

        min_items = section.constraint(ConstraintKind.MIN_ITEMS_PER_SECTION)
        if min_items is not None:
            if 0 < len(pros_items) < min_items:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-min-pros",
                        severity=Severity.INFO,
                        message=f"Advantages section has {len(pros_items)} items, consider adding more (minimum: {min_items})",
                        fix=f"Add more advantages to reach at least {min_items} items",
                    )
                )
            if 0 < len(cons_items) < min_items:
                findings.append(
                    Finding(
                        rule=f"{pattern_id}-min-cons",
                        severity=Severity.INFO,
                        message=f"Disadvantages section has {len(cons_items)} items, consider adding more (minimum: {min_items})",
                        fix=f"Add more disadvantages to reach at least {min_items} items",
                    )
                )

        if section.flag(ConstraintKind.SECTION_ORDER) and pros and cons and cons.line_index < pros.line_index:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-section-order",
                    severity=Severity.INFO,
                    message="Consider placing Advantages section before Disadvantages section",
                    fix="Reorder sections to show advantages first, then disadvantages",
                    search_text=cons.title,
                    line_hint=cons.line_index,
                )
            )

        return findings

    def _check_required(
        self, pros: HeadingSection | None, cons: HeadingSection | None, pattern_id: str
    ) -> list[Finding]:
        findings = []
        if pros is None:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-missing-advantages",
                    severity=Severity.ERROR,
                    message='Missing required "Advantages" or "Pros" section',
                    fix='Add an "## Advantages" or "## Pros" section header',
                )
            )
        if cons is None:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-missing-disadvantages",
                    severity=Severity.ERROR,
                    message='Missing required "Disadvantages" or "Cons" section',
                    fix='Add a "## Disadvantages" or "## Cons" section header',
                )
            )
        return findings

    def _check_balance(
        self, pros_items: list[str], cons_items: list[str], pattern_id: str, has_pros: bool, has_cons: bool
    ) -> list[Finding]:
        findings = []
        pros_count, cons_count = len(pros_items), len(cons_items)
        if pros_count == 0 and cons_count == 0:
            return findings

        if pros_count and cons_count:
            ratio = max(pros_count / cons_count, cons_count / pros_count)
        else:
            ratio = float("inf")

        if ratio > MAX_BALANCE_RATIO:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-section-imbalance",
                    severity=Severity.WARNING,
                    message=f"Pros/cons sections are imbalanced: {pros_count} pros vs {cons_count} cons",
                    fix="Try to provide a more balanced view with similar numbers of pros and cons",
                )
            )
        if has_pros and pros_count == 0:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-missing-pros",
                    severity=Severity.WARNING,
                    message="Advantages section exists but contains no items",
                    fix="Add bulleted list items to the Advantages section",
                )
            )
        if has_cons and cons_count == 0:
            findings.append(
                Finding(
                    rule=f"{pattern_id}-missing-cons",
                    severity=Severity.WARNING,
                    message="Disadvantages section exists but contains no items",
                    fix="Add bulleted list items to the Disadvantages section",
                )
            )
        return findings
