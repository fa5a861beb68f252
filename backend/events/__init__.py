# events/__init__.py
"""
Events app - audit trail for the job board.

Usage:
    from events.emitter import emit_event
    from events.types import EventTypes, VacancyCreatedData

    emit_event(
        store,
        actor=actor,
        event_type=EventTypes.VACANCY_CREATED,
        aggregate_type="Vacancy",
        aggregate_id=vacancy.id,
        company_id=vacancy.company_id,
        data=VacancyCreatedData(...),
    )
"""
