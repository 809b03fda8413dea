"""
Application services layer (use cases).

Services orchestrate the domain logic of a metadata refresh:
- episode_matcher: identity resolution of remote episodes
- ignore_resolver: default "ignored" flag of discovered episodes
- air_date_resolver: de-duplication of colliding air dates
- episode_refresh: episode reconciliation, batch persistence, events
- series_refresh: series field merge and orchestration
- refresh_controller: command and event entry points

Services depend on ports (interfaces) from core/, never on concrete
implementations from adapters/.
"""
