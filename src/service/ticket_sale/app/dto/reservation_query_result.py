import attrs


@attrs.define(frozen=True)
class ReservationQueryResult:
    """Answer to "does this address hold the ticket for this seat?" """

    owns_ticket: bool
    customer_identifier: str  # the ticket's identifier, whoever holds it
