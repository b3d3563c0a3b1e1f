"""
Plain-text history lines for autonomous actions.

The simulation core stores no prose; this presenter supplies the short
interaction-history descriptions shown to each side of an action.
"""

from __future__ import annotations

from apparat.models.actions import ActionType

A = ActionType

# (actor's view, target's view); {actor} and {target} are display names
HISTORY_TEMPLATES: dict[ActionType, tuple[str, str]] = {
    A.FORM_ALLIANCE: ("Formed an alliance with {target}", "Formed an alliance with {actor}"),
    A.BETRAY_ALLIANCE: ("Betrayed {target}", "Was betrayed by {actor}"),
    A.DENOUNCE: ("Denounced {target}", "Was denounced by {actor}"),
    A.BLOCK_PROMOTION: ("Blocked the promotion of {target}", "Promotion blocked by {actor}"),
    A.SPREAD_RUMORS: ("Spread rumours about {target}", "Target of rumours from {actor}"),
    A.SEEK_PROTECTION: ("Sought protection from {target}", "Took {actor} under protection"),
    A.CULTIVATE_SUPPORT: ("Cultivated {target}", "Was cultivated by {actor}"),
    A.SHARE_INTELLIGENCE: ("Shared intelligence with {target}", "Received intelligence from {actor}"),
    A.ORGANIZE_GATHERING: ("Hosted {target} at a gathering", "Attended a gathering hosted by {actor}"),
    A.MAKE_IMPLICIT_THREAT: ("Warned {target}", "Received a veiled threat from {actor}"),
    A.CURRY_FAVOR: ("Curried favour with {target}", "Was flattered by {actor}"),
    A.SABOTAGE_PROJECT: ("Sabotaged a project of {target}", "Project sabotaged by {actor}"),
    A.NEGOTIATE_TREATY: ("Negotiated a treaty with {target}", "Negotiated a treaty with {actor}"),
    A.DIPLOMATIC_OUTREACH: ("Coordinated outreach with {target}", "Coordinated outreach with {actor}"),
    A.RECALL_AMBASSADOR: ("Consulted {target} on a recall", "Consulted by {actor} on a recall"),
    A.SET_PRODUCTION_QUOTA: ("Set quotas for {target}", "Received quotas from {actor}"),
    A.ALLOCATE_RESOURCES: ("Allocated resources to {target}", "Received resources from {actor}"),
    A.PROPOSE_ECONOMIC_REFORM: ("Pitched a reform to {target}", "Heard a reform pitch from {actor}"),
    A.LAUNCH_INVESTIGATION: ("Investigated {target}", "Was investigated by {actor}"),
    A.CONDUCT_SURVEILLANCE: ("Placed {target} under surveillance", "Was watched by {actor}"),
    A.DETAIN_SUSPECT: ("Detained {target}", "Detained by {actor}"),
    A.PROPOSE_LEGISLATION: ("Sought {target}'s backing for a bill", "Asked by {actor} to back a bill"),
    A.ADMINISTRATIVE_REFORM: ("Reorganised the office of {target}", "Office reorganised by {actor}"),
    A.MANAGE_CRISIS: ("Managed a crisis with {target}", "Managed a crisis with {actor}"),
    A.IDEOLOGICAL_CAMPAIGN: ("Lectured {target} on doctrine", "Lectured on doctrine by {actor}"),
    A.CADRE_REVIEW: ("Reviewed the file of {target}", "File reviewed by {actor}"),
    A.ENFORCE_DISCIPLINE: ("Disciplined {target}", "Disciplined by {actor}"),
    A.INSPECT_TROOP_LOYALTY: ("Inspected units under {target}", "Units inspected by {actor}"),
    A.POLITICAL_INDOCTRINATION: ("Ran political study for {target}", "Attended political study by {actor}"),
    A.VET_OFFICERS: ("Vetted {target}", "Vetted by {actor}"),
    A.PROPOSE_POLICY_CHANGE: ("Proposed a policy to {target}", "Heard a policy proposal from {actor}"),
    A.CALL_EMERGENCY_MEETING: ("Summoned {target} to an emergency meeting", "Summoned to an emergency meeting by {actor}"),
    A.ISSUE_DIRECTIVE: ("Issued a directive to {target}", "Received a directive from {actor}"),
    A.DEMAND_RESIGNATION: ("Demanded the resignation of {target}", "Resignation demanded by {actor}"),
    A.REORGANIZE_DEPARTMENT: ("Reorganised the department of {target}", "Department reorganised by {actor}"),
    A.SET_NATIONAL_PRIORITY: ("Set a national priority with {target}", "Briefed on a national priority by {actor}"),
    A.PROPOSE_LAW_CHANGE: ("Lobbied {target} on a law change", "Lobbied by {actor} on a law change"),
    A.RESPOND_TO_CRISIS: ("Responded to a crisis with {target}", "Responded to a crisis with {actor}"),
    A.ADDRESS_SHORTAGE: ("Tackled a shortage with {target}", "Tackled a shortage with {actor}"),
    A.HANDLE_INCIDENT: ("Handled an incident with {target}", "Handled an incident with {actor}"),
    A.SUPPRESS_UNREST: ("Suppressed unrest with {target}", "Suppressed unrest with {actor}"),
}


class PlainTextPresenter:
    """Renders history lines from fixed templates."""

    def history_lines(
        self, action: ActionType, actor_name: str, target_name: str
    ) -> tuple[str, str]:
        actor_line, target_line = HISTORY_TEMPLATES.get(
            action, ("Dealt with {target}", "Dealt with {actor}")
        )
        return (
            actor_line.format(actor=actor_name, target=target_name),
            target_line.format(actor=actor_name, target=target_name),
        )
