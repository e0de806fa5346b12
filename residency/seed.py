"""Built-in jurisdiction rules (Schengen zone plus common tax-residency day counts)."""
from residency.schemas.jurisdiction import CountingMethod, JurisdictionType, RuleDefinition

SYSTEM_RULES: tuple[RuleDefinition, ...] = (
    RuleDefinition(
        code="schengen",
        name="Schengen Area",
        type=JurisdictionType.zone,
        days_allowed=90,
        window_days=180,
        counting_method=CountingMethod.rolling,
        description="Short-stay visitors may spend 90 days in any rolling 180-day period.",
        notes="Regulation (EU) 2016/399, Art. 6(1).",
        display_order=0,
    ),
    RuleDefinition(
        code="fr",
        name="France (tax residency)",
        type=JurisdictionType.country,
        parent_code="schengen",
        days_allowed=183,
        counting_method=CountingMethod.calendar_year,
        description="More than 183 days in France in a calendar year is a strong indicator of tax residency.",
        notes="Code général des impôts, Art. 4 B.",
        display_order=10,
    ),
    RuleDefinition(
        code="uk",
        name="United Kingdom (statutory residence test)",
        type=JurisdictionType.country,
        days_allowed=183,
        counting_method=CountingMethod.fiscal_year,
        reset_month=4,
        reset_day=6,
        description="183 or more days in a UK tax year (6 April to 5 April) makes you UK resident.",
        notes="Finance Act 2013, Sch. 45.",
        display_order=20,
    ),
    RuleDefinition(
        code="us-ny",
        name="New York (statutory residency)",
        type=JurisdictionType.state,
        days_allowed=183,
        counting_method=CountingMethod.calendar_year,
        description="More than 183 days in New York in a calendar year, with a permanent place of abode.",
        notes="N.Y. Tax Law § 605(b)(1)(B).",
        display_order=30,
    ),
)


class RuleCatalog:
    """Read-only lookup over jurisdiction rules, loaded once."""

    def __init__(self, rules=SYSTEM_RULES):
        self._rules = {r.code: r for r in rules}

    def get_rule(self, code: str) -> RuleDefinition | None:
        return self._rules.get((code or "").strip().lower())

    def require_rule(self, code: str) -> RuleDefinition:
        rule = self.get_rule(code)
        if rule is None:
            raise KeyError(f"No jurisdiction rule for {code!r}")
        return rule

    def all_rules(self, type: JurisdictionType | str | None = None) -> list[RuleDefinition]:
        rules = self._rules.values()
        if type is not None:
            rules = [r for r in rules if r.type == JurisdictionType(type)]
        return sorted(rules, key=lambda r: (r.display_order, r.name))

    def tracked(self, codes) -> list[RuleDefinition]:
        """Rules for the user's tracked codes, skipping unknown ones."""
        return [r for r in (self.get_rule(c) for c in codes) if r is not None]


def default_catalog() -> RuleCatalog:
    return RuleCatalog()
