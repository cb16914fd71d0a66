"""Issue reporting and layout validation.

- issues: LayoutIssue, the record for clamps, suppressions and failed checks
- containment: post-layout checks that ducts and pipes stay inside their tiers
"""
