"""
Read queries for hub priority candidates.

Each method applies the source's eligibility rules in SQL and returns raw
dict rows; conversion to candidates and failure handling live in the
fetchers.
"""

from datetime import date, datetime

from app.db.helpers import fetch_all


class HubCandidateRepository:
    """Thin wrappers around the per-source candidate queries."""

    @staticmethod
    async def fetch_messages(user_id: str, cutoff: datetime, limit: int) -> list[dict]:
        return await fetch_all(
            """
            SELECT e.id, e.subject, e.snippet, e.sender_name, e.sender_email,
                   e.date, e.category, e.priority_score, e.contact_id,
                   e.is_read, e.thread_id, e.signal_strength, e.reply_worthiness,
                   ea.categorization ->> 'summary' AS summary,
                   ea.categorization ->> 'quick_action' AS quick_action
            FROM emails e
            LEFT JOIN email_analyses ea ON ea.email_id = e.id
            WHERE e.user_id = %s
              AND e.is_archived = FALSE
              AND (e.is_read = FALSE OR e.reply_worthiness = 'must_reply')
              AND e.date >= %s
            ORDER BY e.date DESC
            LIMIT %s
            """,
            (user_id, cutoff, limit),
            operation="fetch_messages",
        )

    @staticmethod
    async def fetch_tasks(user_id: str, cutoff: datetime, limit: int) -> list[dict]:
        return await fetch_all(
            """
            SELECT id, title, description, action_type, urgency_score,
                   deadline, status, contact_id, email_id, created_at
            FROM actions
            WHERE user_id = %s
              AND status = 'pending'
              AND created_at >= %s
            ORDER BY urgency_score DESC NULLS LAST
            LIMIT %s
            """,
            (user_id, cutoff, limit),
            operation="fetch_tasks",
        )

    @staticmethod
    async def fetch_events(user_id: str, start: date, end: date, limit: int) -> list[dict]:
        return await fetch_all(
            """
            SELECT id, title, description, start_date, start_time,
                   location, rsvp_required, rsvp_status
            FROM events
            WHERE user_id = %s
              AND is_archived = FALSE
              AND start_date BETWEEN %s AND %s
            ORDER BY start_date ASC, start_time ASC NULLS LAST
            LIMIT %s
            """,
            (user_id, start, end, limit),
            operation="fetch_events",
        )

    @staticmethod
    async def fetch_extracted_dates(
        user_id: str, start: date, end: date, now: datetime, limit: int
    ) -> list[dict]:
        return await fetch_all(
            """
            SELECT id, date_type, date, event_time, title, description,
                   priority_score, email_id, contact_id, is_recurring,
                   related_entity, confidence
            FROM extracted_dates
            WHERE user_id = %s
              AND date BETWEEN %s AND %s
              AND is_acknowledged = FALSE
              AND is_hidden = FALSE
              AND (snoozed_until IS NULL OR snoozed_until <= %s)
            ORDER BY date ASC, event_time ASC NULLS LAST
            LIMIT %s
            """,
            (user_id, start, end, now, limit),
            operation="fetch_extracted_dates",
        )

    @staticmethod
    async def fetch_clients(user_id: str) -> list[dict]:
        return await fetch_all(
            """
            SELECT id, name, client_priority
            FROM contacts
            WHERE user_id = %s
              AND is_client = TRUE
              AND client_status = 'active'
            """,
            (user_id,),
            operation="fetch_clients",
        )
