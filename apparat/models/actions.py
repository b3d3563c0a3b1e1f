"""
Autonomous action catalog.

One enumerated type plus pure lookup tables for the semantic properties
the decision logic depends on: category, gating, severity and disposition
effect. Presentation text lives behind ActionPresenter, not here.
"""

from __future__ import annotations

from enum import Enum

from apparat.models.actor import Actor, CareerTrack


class ActionCategory(str, Enum):
    """Scheming versus the governance families."""

    SCHEMING = "scheming"
    FOREIGN_AFFAIRS = "foreign_affairs"
    ECONOMIC_PLANNING = "economic_planning"
    SECURITY = "security"
    ADMINISTRATION = "administration"
    PARTY_WORK = "party_work"
    MILITARY_POLITICAL = "military_political"
    LEADERSHIP = "leadership"
    REACTIVE = "reactive"


class ActionType(str, Enum):
    """Every autonomous maneuver an actor can perform."""

    # Scheming
    FORM_ALLIANCE = "form_alliance"
    BETRAY_ALLIANCE = "betray_alliance"
    DENOUNCE = "denounce"
    BLOCK_PROMOTION = "block_promotion"
    SPREAD_RUMORS = "spread_rumors"
    SEEK_PROTECTION = "seek_protection"
    CULTIVATE_SUPPORT = "cultivate_support"
    SHARE_INTELLIGENCE = "share_intelligence"
    ORGANIZE_GATHERING = "organize_gathering"
    MAKE_IMPLICIT_THREAT = "make_implicit_threat"
    CURRY_FAVOR = "curry_favor"
    SABOTAGE_PROJECT = "sabotage_project"

    # Foreign affairs
    NEGOTIATE_TREATY = "negotiate_treaty"
    DIPLOMATIC_OUTREACH = "diplomatic_outreach"
    RECALL_AMBASSADOR = "recall_ambassador"

    # Economic planning
    SET_PRODUCTION_QUOTA = "set_production_quota"
    ALLOCATE_RESOURCES = "allocate_resources"
    PROPOSE_ECONOMIC_REFORM = "propose_economic_reform"

    # Security services
    LAUNCH_INVESTIGATION = "launch_investigation"
    CONDUCT_SURVEILLANCE = "conduct_surveillance"
    DETAIN_SUSPECT = "detain_suspect"

    # State ministry
    PROPOSE_LEGISLATION = "propose_legislation"
    ADMINISTRATIVE_REFORM = "administrative_reform"
    MANAGE_CRISIS = "manage_crisis"

    # Party apparatus
    IDEOLOGICAL_CAMPAIGN = "ideological_campaign"
    CADRE_REVIEW = "cadre_review"
    ENFORCE_DISCIPLINE = "enforce_discipline"

    # Military-political
    INSPECT_TROOP_LOYALTY = "inspect_troop_loyalty"
    POLITICAL_INDOCTRINATION = "political_indoctrination"
    VET_OFFICERS = "vet_officers"

    # Leadership
    PROPOSE_POLICY_CHANGE = "propose_policy_change"
    CALL_EMERGENCY_MEETING = "call_emergency_meeting"
    ISSUE_DIRECTIVE = "issue_directive"
    DEMAND_RESIGNATION = "demand_resignation"
    REORGANIZE_DEPARTMENT = "reorganize_department"
    SET_NATIONAL_PRIORITY = "set_national_priority"
    PROPOSE_LAW_CHANGE = "propose_law_change"

    # Reactive governance
    RESPOND_TO_CRISIS = "respond_to_crisis"
    ADDRESS_SHORTAGE = "address_shortage"
    HANDLE_INCIDENT = "handle_incident"
    SUPPRESS_UNREST = "suppress_unrest"

    @property
    def category(self) -> ActionCategory:
        return ACTION_CATEGORIES[self]

    @property
    def minimum_position(self) -> int:
        return MINIMUM_POSITION.get(self, _CATEGORY_MINIMUM_POSITION[self.category])

    @property
    def required_track(self) -> CareerTrack | None:
        return CATEGORY_TRACKS.get(self.category)

    @property
    def severity(self) -> int:
        return ACTION_SEVERITY.get(self, DEFAULT_SEVERITY)

    @property
    def disposition_effect(self) -> int:
        """How the target's view of the actor shifts in the interaction log."""
        return DISPOSITION_EFFECT.get(self, 0)

    @property
    def is_dramatic(self) -> bool:
        return self in DRAMATIC_ACTIONS

    @property
    def is_governance(self) -> bool:
        return self.category != ActionCategory.SCHEMING


def _grouped(category: ActionCategory, *actions: ActionType) -> dict[ActionType, ActionCategory]:
    return {action: category for action in actions}


SCHEMING_ACTIONS = (
    ActionType.FORM_ALLIANCE,
    ActionType.BETRAY_ALLIANCE,
    ActionType.DENOUNCE,
    ActionType.BLOCK_PROMOTION,
    ActionType.SPREAD_RUMORS,
    ActionType.SEEK_PROTECTION,
    ActionType.CULTIVATE_SUPPORT,
    ActionType.SHARE_INTELLIGENCE,
    ActionType.ORGANIZE_GATHERING,
    ActionType.MAKE_IMPLICIT_THREAT,
    ActionType.CURRY_FAVOR,
    ActionType.SABOTAGE_PROJECT,
)

ACTION_CATEGORIES: dict[ActionType, ActionCategory] = {
    **_grouped(ActionCategory.SCHEMING, *SCHEMING_ACTIONS),
    **_grouped(
        ActionCategory.FOREIGN_AFFAIRS,
        ActionType.NEGOTIATE_TREATY,
        ActionType.DIPLOMATIC_OUTREACH,
        ActionType.RECALL_AMBASSADOR,
    ),
    **_grouped(
        ActionCategory.ECONOMIC_PLANNING,
        ActionType.SET_PRODUCTION_QUOTA,
        ActionType.ALLOCATE_RESOURCES,
        ActionType.PROPOSE_ECONOMIC_REFORM,
    ),
    **_grouped(
        ActionCategory.SECURITY,
        ActionType.LAUNCH_INVESTIGATION,
        ActionType.CONDUCT_SURVEILLANCE,
        ActionType.DETAIN_SUSPECT,
    ),
    **_grouped(
        ActionCategory.ADMINISTRATION,
        ActionType.PROPOSE_LEGISLATION,
        ActionType.ADMINISTRATIVE_REFORM,
        ActionType.MANAGE_CRISIS,
    ),
    **_grouped(
        ActionCategory.PARTY_WORK,
        ActionType.IDEOLOGICAL_CAMPAIGN,
        ActionType.CADRE_REVIEW,
        ActionType.ENFORCE_DISCIPLINE,
    ),
    **_grouped(
        ActionCategory.MILITARY_POLITICAL,
        ActionType.INSPECT_TROOP_LOYALTY,
        ActionType.POLITICAL_INDOCTRINATION,
        ActionType.VET_OFFICERS,
    ),
    **_grouped(
        ActionCategory.LEADERSHIP,
        ActionType.PROPOSE_POLICY_CHANGE,
        ActionType.CALL_EMERGENCY_MEETING,
        ActionType.ISSUE_DIRECTIVE,
        ActionType.DEMAND_RESIGNATION,
        ActionType.REORGANIZE_DEPARTMENT,
        ActionType.SET_NATIONAL_PRIORITY,
        ActionType.PROPOSE_LAW_CHANGE,
    ),
    **_grouped(
        ActionCategory.REACTIVE,
        ActionType.RESPOND_TO_CRISIS,
        ActionType.ADDRESS_SHORTAGE,
        ActionType.HANDLE_INCIDENT,
        ActionType.SUPPRESS_UNREST,
    ),
}

CATEGORY_TRACKS: dict[ActionCategory, CareerTrack] = {
    ActionCategory.FOREIGN_AFFAIRS: CareerTrack.FOREIGN_AFFAIRS,
    ActionCategory.ECONOMIC_PLANNING: CareerTrack.ECONOMIC_PLANNING,
    ActionCategory.SECURITY: CareerTrack.SECURITY_SERVICES,
    ActionCategory.ADMINISTRATION: CareerTrack.STATE_MINISTRY,
    ActionCategory.PARTY_WORK: CareerTrack.PARTY_APPARATUS,
    ActionCategory.MILITARY_POLITICAL: CareerTrack.MILITARY_POLITICAL,
}

_CATEGORY_MINIMUM_POSITION: dict[ActionCategory, int] = {
    ActionCategory.SCHEMING: 0,
    ActionCategory.FOREIGN_AFFAIRS: 3,
    ActionCategory.ECONOMIC_PLANNING: 3,
    ActionCategory.SECURITY: 3,
    ActionCategory.ADMINISTRATION: 3,
    ActionCategory.PARTY_WORK: 3,
    ActionCategory.MILITARY_POLITICAL: 3,
    ActionCategory.LEADERSHIP: 4,
    ActionCategory.REACTIVE: 3,
}

MINIMUM_POSITION: dict[ActionType, int] = {
    ActionType.PROPOSE_POLICY_CHANGE: 4,
    ActionType.CALL_EMERGENCY_MEETING: 5,
    ActionType.ISSUE_DIRECTIVE: 5,
    ActionType.DEMAND_RESIGNATION: 6,
    ActionType.REORGANIZE_DEPARTMENT: 6,
    ActionType.SET_NATIONAL_PRIORITY: 7,
    ActionType.PROPOSE_LAW_CHANGE: 7,
}

# Regional officials handle local crises outside their category track
REGIONAL_ACTIONS = (
    ActionType.MANAGE_CRISIS,
    ActionType.ADDRESS_SHORTAGE,
    ActionType.SUPPRESS_UNREST,
)

DEFAULT_SEVERITY = 40
ACTION_SEVERITY: dict[ActionType, int] = {
    ActionType.DETAIN_SUSPECT: 90,
    ActionType.DENOUNCE: 75,
    ActionType.BETRAY_ALLIANCE: 75,
    ActionType.LAUNCH_INVESTIGATION: 60,
    ActionType.MAKE_IMPLICIT_THREAT: 60,
    ActionType.BLOCK_PROMOTION: 50,
    ActionType.SABOTAGE_PROJECT: 50,
    ActionType.SPREAD_RUMORS: 50,
    ActionType.FORM_ALLIANCE: 50,
    ActionType.SHARE_INTELLIGENCE: 50,
    ActionType.CURRY_FAVOR: 30,
    ActionType.CULTIVATE_SUPPORT: 30,
    ActionType.ORGANIZE_GATHERING: 30,
}

DISPOSITION_EFFECT: dict[ActionType, int] = {
    ActionType.FORM_ALLIANCE: 15,
    ActionType.BETRAY_ALLIANCE: -30,
    ActionType.DENOUNCE: -25,
    ActionType.BLOCK_PROMOTION: -20,
    ActionType.SPREAD_RUMORS: -10,
    ActionType.SEEK_PROTECTION: 5,
    ActionType.CULTIVATE_SUPPORT: 10,
    ActionType.SHARE_INTELLIGENCE: 10,
    ActionType.ORGANIZE_GATHERING: 5,
    ActionType.MAKE_IMPLICIT_THREAT: -15,
    ActionType.CURRY_FAVOR: 5,
    ActionType.SABOTAGE_PROJECT: -20,
    ActionType.LAUNCH_INVESTIGATION: -25,
    ActionType.CONDUCT_SURVEILLANCE: -5,
    ActionType.DETAIN_SUSPECT: -40,
    ActionType.CADRE_REVIEW: -5,
    ActionType.ENFORCE_DISCIPLINE: -20,
    ActionType.VET_OFFICERS: -5,
    ActionType.DEMAND_RESIGNATION: -50,
    ActionType.ALLOCATE_RESOURCES: 10,
    ActionType.MANAGE_CRISIS: 8,
    ActionType.RESPOND_TO_CRISIS: 10,
    ActionType.ADDRESS_SHORTAGE: 10,
}

DRAMATIC_ACTIONS = frozenset(
    {
        ActionType.BETRAY_ALLIANCE,
        ActionType.DENOUNCE,
        ActionType.MAKE_IMPLICIT_THREAT,
        ActionType.SABOTAGE_PROJECT,
        ActionType.LAUNCH_INVESTIGATION,
        ActionType.DETAIN_SUSPECT,
        ActionType.DEMAND_RESIGNATION,
        ActionType.ENFORCE_DISCIPLINE,
    }
)

# Actions whose outcome is rolled rather than guaranteed
CONTESTED_ACTIONS = frozenset(
    {
        ActionType.DENOUNCE,
        ActionType.BLOCK_PROMOTION,
        ActionType.SABOTAGE_PROJECT,
        ActionType.DETAIN_SUSPECT,
        ActionType.DEMAND_RESIGNATION,
    }
)


def can_perform(actor: Actor, action: ActionType, *, committee_member: bool = False) -> bool:
    """
    Check position and track gating for an action.

    Top leadership (position 7+) bypasses track requirements. Regional
    officials may take the regional crisis actions. Law changes require a
    standing committee seat.
    """
    if actor.position < action.minimum_position:
        return False
    if action == ActionType.PROPOSE_LAW_CHANGE and not committee_member:
        return False
    required = action.required_track
    if required is None or actor.is_top_leadership or actor.track == required:
        return True
    return actor.track == CareerTrack.REGIONAL and action in REGIONAL_ACTIONS
