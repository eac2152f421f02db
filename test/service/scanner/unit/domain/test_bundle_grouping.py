import math

import pytest

from src.service.scanner.domain.bundle_grouping import (
    BundleRow,
    SingleRow,
    bundle_members,
    children_of,
    compute_bundle_tally,
    find_guardian,
    group_ticket_rows,
    narrow_to_parent,
    sort_tickets_by_type,
)
from src.service.scanner.domain.enum.ticket_status import TicketStatus
from src.service.scanner.domain.enum.ticket_type import TicketType
from test.service.scanner.unit.helpers import child, make_ticket, parent


@pytest.mark.unit
class TestGroupTicketRows:
    def test_unbundled_and_lone_bundle_tickets_become_single_rows(self) -> None:
        tickets = [
            make_ticket('T1', bundle_id=None),
            make_ticket('T2', bundle_id='solo'),
        ]

        rows = group_ticket_rows(tickets)

        assert [type(row) for row in rows] == [SingleRow, SingleRow]
        assert [row.key for row in rows] == ['T1', 'T2']

    def test_bundle_row_aggregates(self) -> None:
        # Given: a priority parent, an adult parent and a child in one bundle
        tickets = [
            child('C1', price=5.0, name='Zed'),
            make_ticket('P2', type=TicketType.PRIORITY, price=None),
            parent('P1', status=TicketStatus.REDEEMED, price=20.0, name='Ana'),
        ]

        # When
        rows = group_ticket_rows(tickets)

        # Then: members sorted adult -> priority -> child, parent status is representative
        assert len(rows) == 1
        row = rows[0]
        assert isinstance(row, BundleRow)
        assert [t.id for t in row.tickets] == ['P1', 'P2', 'C1']
        assert row.count == 3
        assert row.price_total == 25.0
        assert row.status == TicketStatus.REDEEMED
        assert row.all_same_status is False
        assert row.primary_name == 'Ana'
        assert row.parent_ticket_id == 'P1'

    def test_bundle_without_parents_uses_first_sorted_status(self) -> None:
        tickets = [
            child('C2', status=TicketStatus.INVALID, name='Bea'),
            child('C1', status=TicketStatus.ACTIVE, name='Al'),
        ]

        row = group_ticket_rows(tickets)[0]

        assert isinstance(row, BundleRow)
        assert row.status == TicketStatus.ACTIVE

    def test_non_finite_price_total_is_none(self) -> None:
        tickets = [parent('P1', price=math.inf), child('C1', price=1.0)]

        row = group_ticket_rows(tickets)[0]

        assert isinstance(row, BundleRow)
        assert row.price_total is None

    def test_rows_ordered_by_min_rank_keeping_first_seen_order_on_ties(self) -> None:
        tickets = [
            child('C9', bundle_id=None),
            make_ticket('X1', bundle_id='BX'),
            child('X2', bundle_id='BX'),
            make_ticket('A1', bundle_id=None),
            make_ticket('U1', type=None, bundle_id=None),
        ]

        rows = group_ticket_rows(tickets)

        assert [row.key for row in rows] == ['BX', 'A1', 'C9', 'U1']


@pytest.mark.unit
class TestBundleHelpers:
    def test_sort_breaks_rank_ties_by_holder_name(self) -> None:
        tickets = [parent('P2', name='Zoe'), parent('P1', name='Adam'), child('C1', name='Aaron')]

        assert [t.id for t in sort_tickets_by_type(tickets)] == ['P1', 'P2', 'C1']

    def test_tally_counts_roles_and_statuses(self) -> None:
        tickets = [
            parent('P1', status=TicketStatus.REDEEMED),
            parent('P2', status=TicketStatus.INVALID),
            child('C1', status=TicketStatus.REDEEMED),
            child('C2'),
            child('C3', status=TicketStatus.PENDING),
            make_ticket('U1', type=None),
        ]

        tally = compute_bundle_tally(tickets)

        assert tally.redeemed_parents == 1
        assert tally.active_parents == 0
        assert tally.invalid_parents == 1
        assert tally.redeemed_children == 1
        assert tally.active_children == 1
        assert tally.invalid_children == 0

    def test_guardian_children_and_narrowing(self) -> None:
        p1 = parent('P1')
        p2 = parent('P2')
        c1 = child('C1', parent_ticket_id='P1')
        c2 = child('C2', parent_ticket_id='P2')
        stray = child('C3', parent_ticket_id='P1', bundle_id='other')
        tickets = [p1, p2, c1, c2, stray]

        assert find_guardian(c1, tickets) == p1
        assert find_guardian(stray, tickets) is None
        assert find_guardian(child('C4'), tickets) is None
        assert children_of(p1, tickets) == [c1]
        assert [t.id for t in narrow_to_parent([p1, p2, c1, c2], 'P2')] == ['P2', 'C2']
        assert [t.id for t in narrow_to_parent([p1, p2, c1, c2], 'missing')] == [
            'P1',
            'P2',
            'C1',
            'C2',
        ]

    def test_bundle_members_filters_and_sorts(self) -> None:
        tickets = [child('C1'), parent('P1'), parent('Q1', bundle_id='B2')]

        assert [t.id for t in bundle_members('B1', tickets)] == ['P1', 'C1']
