# services/rent_calc.py
"""
Rent calculation helpers used by monthly invoice generation.

Pipeline:
1. resolve_assignments: one Assignment per occupant of every active room
2. utility_totals_by_property: utility bill totals for the month, per property
3. meal_totals_by_tenant: meal order totals for the month, per tenant
4. allocate: base rent + even utility share + meal cost for each assignment

The aggregation functions query the database; allocate is pure.
"""
from dataclasses import dataclass, replace
from datetime import datetime
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, FrozenSet, Iterable, List, Mapping, Optional, Set, Tuple
import re

from sqlalchemy import func
from sqlalchemy.orm import Session, selectinload

from models import Order, OrderStatus, Room, UtilityBill

MONTH_PATTERN = re.compile(r"\d{4}-\d{2}")


@dataclass(frozen=True)
class Assignment:
     """A tenant placed in a room for the billing month, with computed amounts once allocated."""
     tenant_id: str
     property_id: int
     room_id: int
     base_rent: Decimal
     utility_share: int = 0
     meal_cost: int = 0
     total: int = 0


# ---------------------------------------------------------------------------
# Month and number helpers
# ---------------------------------------------------------------------------

def is_valid_month(value) -> bool:
     """YYYY-MM with a month part between 01 and 12."""
     if not isinstance(value, str) or not MONTH_PATTERN.fullmatch(value):
          return False
     return 1 <= int(value[5:]) <= 12


def month_to_range(month: str) -> Tuple[datetime, datetime]:
     """
     "YYYY-MM" -> (start, end) UTC boundaries, end exclusive.
     Example: "2024-12" -> (2024-12-01 00:00, 2025-01-01 00:00)
     """
     year, mon = (int(part) for part in month.split("-"))
     start = datetime(year, mon, 1)
     end = datetime(year + 1, 1, 1) if mon == 12 else datetime(year, mon + 1, 1)
     return start, end


def to_number(value) -> Decimal:
     """Coerce a stored amount to Decimal; missing or non-numeric values become 0."""
     if value is None or isinstance(value, bool):
          return Decimal(0)
     try:
          number = Decimal(str(value))
     except (InvalidOperation, ValueError):
          return Decimal(0)
     if not number.is_finite():
          return Decimal(0)
     return number


def round_half_up(value) -> int:
     """Round to the nearest whole unit, halves away from zero (2.5 -> 3)."""
     return int(to_number(value).quantize(Decimal(1), rounding=ROUND_HALF_UP))


# ---------------------------------------------------------------------------
# Occupancy
# ---------------------------------------------------------------------------

def build_assignments_from_rooms(rooms: Iterable[Room]) -> List[Assignment]:
     """One assignment per occupant, in room order then occupant order."""
     assignments = []
     for room in rooms:
          for tenant_id in room.occupants:
               assignments.append(
                    Assignment(
                         tenant_id=str(tenant_id),
                         property_id=room.property_id,
                         room_id=room.id,
                         base_rent=to_number(room.base_rent),
                    )
               )
     return assignments


def resolve_assignments(db: Session, month: str, property_id: Optional[int] = None) -> List[Assignment]:
     """
     Enumerate active rooms and emit an assignment for every occupant.

     month is accepted for the contract but does not filter anything: an
     occupant present now is billed the full month regardless of move-in date.
     """
     query = (
          db.query(Room)
          .options(selectinload(Room.occupant_links))
          .filter(Room.is_active.is_(True))
     )
     if property_id is not None:
          query = query.filter(Room.property_id == property_id)

     rooms = query.order_by(Room.id).all()
     return build_assignments_from_rooms(rooms)


def map_tenants_by_property(assignments: Iterable[Assignment]) -> Dict[int, Set[str]]:
     """property_id -> distinct tenant ids, used to split utilities."""
     tenants_by_property: Dict[int, Set[str]] = {}
     for assignment in assignments:
          tenants_by_property.setdefault(assignment.property_id, set()).add(assignment.tenant_id)
     return tenants_by_property


# ---------------------------------------------------------------------------
# Aggregates
# ---------------------------------------------------------------------------

def utility_totals_by_property(db: Session, month: str, property_ids: Iterable[int]) -> Dict[int, int]:
     """
     Sum utility bill amounts for the month, grouped by property.

     Paid and unpaid bills both count. Properties without bills are absent
     from the result; callers default to 0.
     """
     id_list = list(property_ids)
     if not id_list:
          return {}

     rows = (
          db.query(UtilityBill.property_id, func.sum(UtilityBill.amount))
          .filter(UtilityBill.month == month, UtilityBill.property_id.in_(id_list))
          .group_by(UtilityBill.property_id)
          .all()
     )
     return {property_id: int(total or 0) for property_id, total in rows}


def _order_statuses(include_statuses: FrozenSet[str]) -> List[OrderStatus]:
     """Known order statuses named in the policy; unknown names match nothing."""
     return [status for status in OrderStatus if status.value in include_statuses]


def meal_totals_by_tenant(
     db: Session,
     month: str,
     include_statuses: Optional[FrozenSet[str]] = None,
) -> Dict[str, int]:
     """
     Sum meal order totals for the month, grouped by tenant, in major units.

     Orders are stored in cents; each tenant's summed cents are divided by
     100 and rounded once, not per order. include_statuses=None counts
     orders of every status.
     """
     start, end = month_to_range(month)
     query = (
          db.query(Order.user_id, func.sum(Order.total_cents))
          .filter(Order.created_at >= start, Order.created_at < end)
     )
     if include_statuses is not None:
          query = query.filter(Order.status.in_(_order_statuses(include_statuses)))

     rows = query.group_by(Order.user_id).all()
     return {str(user_id): round_half_up(Decimal(int(cents or 0)) / 100) for user_id, cents in rows}


def total_meal_cost(
     db: Session,
     month: str,
     include_statuses: Optional[FrozenSet[str]] = None,
) -> int:
     """All tenants' meal orders for the month, in major units."""
     start, end = month_to_range(month)
     query = db.query(func.sum(Order.total_cents)).filter(
          Order.created_at >= start, Order.created_at < end
     )
     if include_statuses is not None:
          query = query.filter(Order.status.in_(_order_statuses(include_statuses)))
     cents = query.scalar()
     return round_half_up(Decimal(int(cents or 0)) / 100)


# ---------------------------------------------------------------------------
# Allocation
# ---------------------------------------------------------------------------

def allocate(
     assignments: List[Assignment],
     utility_totals: Mapping[int, int],
     meal_totals: Mapping[str, int],
) -> List[Assignment]:
     """
     Compute the invoice amounts for every assignment.

     - utility_share = round(property utility total / distinct tenants in property)
     - meal_cost = round(tenant meal total)
     - base_rent = round(room base rent)
     - total = base_rent + utility_share + meal_cost

     Shares are rounded independently, so their sum can differ from the
     property total by up to N - 1 for N tenants.
     """
     tenants_by_property = map_tenants_by_property(assignments)

     computed = []
     for assignment in assignments:
          tenant_count = len(tenants_by_property.get(assignment.property_id, ())) or 1
          property_total = to_number(utility_totals.get(assignment.property_id, 0))
          utility_share = round_half_up(property_total / tenant_count)

          meal_cost = round_half_up(meal_totals.get(assignment.tenant_id, 0))
          base_rent = round_half_up(assignment.base_rent)

          computed.append(
               replace(
                    assignment,
                    base_rent=Decimal(base_rent),
                    utility_share=utility_share,
                    meal_cost=meal_cost,
                    total=base_rent + utility_share + meal_cost,
               )
          )
     return computed
