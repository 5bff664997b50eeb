"""Built-in attribute table for directory user records.

Primary-channel entries are written onto the user record itself. Enrichment
entries go to the external people index; the ones carrying an external
label are recognized by the index as profile data.
"""

from __future__ import annotations

from rostersync.contracts.schema import AttributeDescriptor, Channel, ValueType

NOTE_LABEL = "personNote"

# Labels the index types as a string collection regardless of the attribute type.
COLLECTION_LABELS = frozenset({"personAnniversaries"})

INTERNAL_COLUMNS = frozenset({"name", "email", "role", "ManagerEmail"})
"""Roster columns used for identity/bookkeeping, never reported as custom attributes."""


def _primary(
    name: str,
    value_type: ValueType = ValueType.STRING,
    *,
    max_length: int | None = None,
    required: bool = False,
    description: str | None = None,
) -> AttributeDescriptor:
    return AttributeDescriptor(
        name=name,
        value_type=value_type,
        channel=Channel.PRIMARY,
        max_length=max_length,
        required=required,
        description=description,
    )


def _enrichment(
    name: str,
    value_type: ValueType,
    label: str,
    *,
    remote_name: str | None = None,
    description: str | None = None,
) -> AttributeDescriptor:
    return AttributeDescriptor(
        name=name,
        value_type=value_type,
        channel=Channel.ENRICHMENT,
        external_label=label,
        remote_name=remote_name,
        description=description,
    )


def _unlabeled(name: str, *, description: str | None = None) -> AttributeDescriptor:
    # No index label: sent as a plain searchable string, list cells included.
    return AttributeDescriptor(
        name=name,
        value_type=ValueType.STRING,
        channel=Channel.ENRICHMENT,
        description=description,
    )


BUILTIN_ATTRIBUTES: tuple[AttributeDescriptor, ...] = (
    # basic
    _primary("displayName", max_length=256, required=True, description="Name shown in the address book"),
    _primary("givenName", max_length=64),
    _primary("surname", max_length=64),
    _primary("accountEnabled", ValueType.BOOL, required=True),
    # contact
    _primary("mail"),
    _primary("mailNickname", max_length=64, required=True),
    _primary("mobilePhone"),
    _primary("businessPhones", ValueType.ARRAY),
    _primary("otherMails", ValueType.ARRAY),
    _primary("faxNumber"),
    # address
    _primary("city", max_length=128),
    _primary("state", max_length=128),
    _primary("country", max_length=128),
    _primary("postalCode", max_length=40),
    _primary("streetAddress", max_length=1024),
    _primary("officeLocation", max_length=128),
    # job
    _primary("jobTitle", max_length=128),
    _primary("department", max_length=64),
    _primary("companyName", max_length=64),
    _primary("employeeId", max_length=16),
    _primary("employeeType"),
    _primary("employeeHireDate", ValueType.DATE),
    _primary("employeeLeaveDateTime", ValueType.DATE),
    _primary("hireDate", ValueType.DATE),
    _primary("employeeOrgData", ValueType.OBJECT, description="Cost center and division"),
    # identity
    _primary("userPrincipalName", required=True),
    _primary("userType"),
    _primary("onPremisesImmutableId"),
    # preferences
    _primary("usageLocation", description="ISO 3166 country code, needed for license assignment"),
    _primary("preferredLanguage"),
    _primary("preferredDataLocation"),
    _primary("mailboxSettings", ValueType.OBJECT),
    # security
    _primary("passwordPolicies"),
    _primary("passwordProfile", ValueType.OBJECT),
    _primary("onPremisesExtensionAttributes", ValueType.OBJECT),
    # legal
    _primary("ageGroup"),
    _primary("consentProvidedForMinor"),
    # enrichment
    _enrichment("aboutMe", ValueType.STRING, NOTE_LABEL, description="Free-form self description"),
    _enrichment("birthday", ValueType.DATE, "personAnniversaries"),
    _enrichment("skills", ValueType.ARRAY, "personSkills"),
    _enrichment("projects", ValueType.ARRAY, "personProjects", remote_name="pastProjects"),
    _enrichment("mySite", ValueType.STRING, "personWebSite"),
    _enrichment("certifications", ValueType.ARRAY, "personCertifications"),
    _enrichment("awards", ValueType.ARRAY, "personAwards"),
    _unlabeled("interests", description="Hobbies and interests"),
    _unlabeled("schools"),
    _unlabeled("responsibilities"),
    _unlabeled("languages"),
)


def is_collection_property(descriptor: AttributeDescriptor) -> bool:
    """Whether the index stores a labeled attribute as a string collection."""
    return descriptor.is_labeled and (
        descriptor.value_type is ValueType.ARRAY or descriptor.external_label in COLLECTION_LABELS
    )
