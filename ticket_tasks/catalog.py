"""The shipped task lists.

Order matters: tasks are printed in the order they appear here. Each
entry is `task(message, test)`; `test` receives the Configuration and a
missing test means the task always applies.
"""

from __future__ import annotations

from ticket_tasks.config import Configuration
from ticket_tasks.descriptors import TaskCatalog, header, task

TEMPLATES_URL = "https://github.com/nicogreenarry/ticket-tasks/edit/master/ticketTasks.js"


# ──────────────────────────────────────────────
# Shared predicates
# ──────────────────────────────────────────────


def _has_reviewers(c: Configuration) -> bool:
    return c.hi or (c.git and c.git_team)


def _has_staging(c: Configuration) -> bool:
    return (c.hi and c.presets.hi_staging_pre_acceptance_testing) or (c.git and c.presets.git_has_staging)


def _ships_behaviour(c: Configuration) -> bool:
    return c.feature or c.fix


# ──────────────────────────────────────────────
# Templates
# ──────────────────────────────────────────────


def _publish_mockups(c: Configuration) -> str:
    extra = ", kickstarter, blog" if c.git else ""
    return f"Publish some mockups to appropriate channels: ticket, PR, slack{extra}?"


def _retroactive_action(c: Configuration) -> str:
    entities = "people/companies/etc." if c.hi else "users/contacts/stories/etc."
    if c.fix:
        return (
            "Whom did this bug/issue/etc. affect? Even after fixing the issue, what do we need to do to address "
            "those problems? Even in the case of proactive fixes, think about taking retroactive action on "
            f"{entities} whom this change won’t automatically affect, but should."
        )
    return f"Take retroactive action on {entities} whom this change won’t automatically affect, but should."


def _move_into_tracker(c: Configuration) -> str:
    if c.pivotal:
        source, link = "Pivotal", f"[PR ___]({c.repo}/pull/___)"
    else:
        source, link = "Jira", f"[PR ___|{c.repo}/pull/___]"
    return (
        f"Move this into the {source} task: PR: Follow through to get approval for {link}, "
        "and complete all tasks on PR"
    )


def _review_blocker(c: Configuration) -> str:
    return f"Add a blocker in this ticket linking the reviewer: @USERNAME review [PR _____]({c.presets.repos['hi']}/pull/_____)"


def _merge(c: Configuration) -> str:
    freeze = "[NOT DURING CODEFREEZE] " if c.hi else ""
    return (
        f"{freeze}Merge PR into appropriate terminal branch (to production, master, or a staging branch,"
        " for hotfixes, quick wins, and epic stories, respectively)"
    )


def _delete_branches(c: Configuration) -> str:
    how = ' using "git checkout master && git pull && git branch -d "' if c.git else ""
    return f"Delete local/remote branches{how}"


def _terminal_branch_tests(c: Configuration) -> str:
    repo = c.presets.repos["hi"]
    return (
        "Make sure tests pass after merging into the terminal branch "
        f"([master]({repo}/commits/master), [production]({repo}/commits/production))"
    )


STYLE_PR_BLOCK = """No ticket
No testing; no functional changes
No need to coordinate deployment

Just style fixes.

Suggestions for reviewing style-fix PRs:
* There shouldn't be any functional changes, so if you see anything that looks like one, call it out.
* You may want to review using Unified view (rather than Split view). I prefer Split view for most PRs, \
because I can see each version on its own. But for these style PRs, each change can really be considered \
on its own, without consideration for the other changes around it, and the Unified view sometimes makes \
that easier."""


# ──────────────────────────────────────────────
# Task lists
# ──────────────────────────────────────────────

GENERIC_TASKS = (
    task("Should I demonstrate this work (e.g. at a Eng staff meeting)?"),
)

TICKET_TASKS = (
    # Prework
    task("Create several versions of mockups for the thing I’m building", lambda c: c.ui),
    task(_publish_mockups, lambda c: c.ui),
    # Postwork
    task(
        "Create blocker: @thomas_walichiewicz and/or @mohan_surya: language/design sign-off",
        lambda c: c.ui and c.hi,
    ),
    task("Publish screenshots of the completed work", lambda c: c.ui),
    task("Update docs based on this change? If so, post docs to #eng_learn after the PR exists."),
    task(
        'Pre-acceptance testing on staging: Write a comment, "@REQUESTER, this is ready for pre-acceptance'
        ' testing on staging; see PR_URL for the staging url. You can test it by STEPS_TO_TEST". Create a blocker'
        ' labeling requester: "@REQUESTER pre-acceptance test ticket per comment". OR if it’s something that can’t'
        ' be tested easily on staging, consider one of these comments: "@REQUESTER, this is ready for a'
        ' pre-acceptance test. I’ll have to demo it for you on my machine - can you let me know when might be a'
        ' good time?"',
        lambda c: _ships_behaviour(c) and _has_staging(c),
    ),
    task(_retroactive_action),
    task("Resolve any related rollbars (see Jira integration and comments)", lambda c: c.fix),
    task(
        "Post-deploy Acceptance testing. Comment with testing procedures, and create blocker. Indicate whether"
        " tester should Accept/Resolve ticket when they’re satisfied.",
        _ships_behaviour,
    ),
    task(
        "Report out about this? See checklist (link to checklist?). Post high-level status update somewhere,"
        " e.g. to slack channel?"
    ),
    task(
        "Think about (1) what improved design, resolved tech debt, etc. could have prevented this issue,"
        " and (2) what improved design/debugging/error reporting/etc. would have made it faster to debug and solve",
        lambda c: c.fix,
    ),
)

PR_TASKS = (
    header("Tasks prior to approval"),
    task("Open circleCI tabs so I’ll immediately be notified of test failures", lambda c: c.hi),
    task("Add Hotfix label to PR?", lambda c: c.chore or c.fix),
    task("JSX/TSX: Resolve any warnings/errors in the browser console", lambda c: c.ui),
    task("Do manual testing; record my steps. Even for chores, at least deploy app locally", lambda c: not c.style),
    task("Add automated tests", lambda c: c.hi and not (c.chore or c.style)),
    task(
        'Review: Search "files changed" in PR, and deal with or get rid of each ASSUMPTION, TODO, FIXME, HACK,'
        ' and console. First, make sure the page is refreshed, and that all "Load Diff" files are expanded'
        " (except for `package-lock`). If there are instances I added/changed and won’t remove, consider"
        " commenting on them (in code or in the PR) to explain them.",
        lambda c: not c.style,
    ),
    task(
        'Update the "Changes here include..." and "Tests" sections of the PR description',
        lambda c: not c.style,
    ),
    task("Request review for PR", _has_reviewers),
    task(_review_blocker, lambda c: c.pivotal and _has_reviewers(c)),
    task(_move_into_tracker, lambda c: c.jira or c.pivotal),
    task(
        'Update ticket status to Code Complete, and update ticket title ("[AWAITING code review]")',
        lambda c: c.hi and c.jira,
    ),
    task("Resolve the blocker for the PR reviewer", lambda c: c.pivotal and _has_reviewers(c)),
    task("Check for any `git stash` entries that are relevant; delete them once I’m done with them"),
    task(
        "Pre-merge, on staging: as an engineer, perform final acceptance testing on the deployed version of"
        " the code",
        lambda c: not c.chore and not c.style and _has_staging(c),
    ),
    task(
        "Wait for pre-acceptance testing on staging before merging. If no pre-acceptance testing required, at"
        " least get approval from relevant stakeholder(s) before merging PR (if this is merging into an"
        " epic/release branch, move this task into the Epic meta ticket",
        lambda c: _ships_behaviour(c) and (
            (c.hi and c.presets.hi_staging_pre_acceptance_testing)
            or (c.git and c.git_team and c.presets.git_has_staging)
        ),
    ),
    task("Get reviewer approval", _has_reviewers),
    task("Make sure I don’t have changes I didn’t push (e.g. responding to PR comments)"),
    task("Wait for tests to pass on final commit", lambda c: c.hi or (c.git and c.presets.git_has_testing)),
    # After merge
    header("Tasks after approval/merge"),
    task(_merge),
    task("Once the final PR is merged, mark ticket Finished (for Chores, do this task last)",
         lambda c: c.feature and c.pivotal),
    task(_delete_branches),
    task(_terminal_branch_tests, lambda c: c.git and c.presets.git_has_testing),
    task('Update ticket title to reflect status (e.g. "[AWAITING DATE deploy]")', lambda c: c.hi and c.jira),
    # GIT has no scheduled deploys yet, so every PR needs a reminder
    task(
        "Deploy the code (to production, master, or a staging branch, for hotfixes, quick wins, and epic"
        " stories, respectively)",
        lambda c: c.git or _ships_behaviour(c),
    ),
    task(
        "As an engineer, perform final acceptance testing on the deployed version of the code, per the"
        " acceptance testing steps in the Acceptance Testing log",
        _ships_behaviour,
    ),
    task(
        "Take screenshots of various UI states and add them to [our design repo](https://github.com/captain401/design)"
        " (`cd dev/design`), and probably to PR description (or as comments if there are a lot of them). If"
        " they’re just a small change to a page (adding a button), name them the same as the main screen with an"
        " appended A (e.g. 00A.png for a summary screen change)",
        lambda c: c.hi and c.ui,
    ),
    task("Record in CMD, MILO notes, as Retro/etc. sticky?", lambda c: c.hi and not c.style),
    task("Once the final PR/branch is deployed, mark ticket Delivered", lambda c: c.feature and c.pivotal),
    task('Update ticket title to reflect status (e.g. "[AWAITING acceptance test]")', lambda c: c.hi and c.jira),
    # Style PRs only
    task(STYLE_PR_BLOCK, lambda c: c.style),
)

DEFAULT_CATALOG = TaskCatalog(generic=GENERIC_TASKS, ticket=TICKET_TASKS, pr=PR_TASKS)
