EVENTS_URL = "/api/v1/events"
DELETED_EVENTS_URL = "/api/v1/events/deleted"
EVENT_URL = "/api/v1/events/{event_id}"
RECOVER_EVENT_URL = "/api/v1/events/{event_id}/recover"
