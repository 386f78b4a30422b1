"""Recognized filters and column translations for each entity."""

from types import MappingProxyType

from .filters import AtLeast, AtMost, DerivedBoolean, PredicateTable, SubstringMatch

JOB_FILTERS = PredicateTable(
    "jobs",
    {
        "title": SubstringMatch("title"),
        "minSalary": AtLeast("salary"),
        "hasEquity": DerivedBoolean(when_true="equity != 0", when_false="equity = 0"),
    },
)

COMPANY_FILTERS = PredicateTable(
    "companies",
    {
        "nameLike": SubstringMatch("name"),
        "minEmployees": AtLeast("num_employees"),
        "maxEmployees": AtMost("num_employees"),
    },
)

JOB_COLUMNS = MappingProxyType({
    "companyHandle": "company_handle",
})

COMPANY_COLUMNS = MappingProxyType({
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
})

USER_COLUMNS = MappingProxyType({
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
})
