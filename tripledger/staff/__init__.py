"""Mini README: Staff records and the lookup used by every calculation.

Trips and payments reference staff by identifier only. ``StaffDirectory``
resolves those weak references and degrades to zero contributions or a
``removed`` placeholder when a member has been deleted.
"""

from .directory import REMOVED_PLACEHOLDER, StaffDirectory, StaffMember, StaffRole

__all__ = ["REMOVED_PLACEHOLDER", "StaffDirectory", "StaffMember", "StaffRole"]
