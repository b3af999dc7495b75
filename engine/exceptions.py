"""
Exceptions raised by the correlation and impact engine when a referenced component or event does not exist in the snapshot being analysed.

Copyright (c) 2026 Stefan Kumarasinghe

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.
You may obtain a copy of the License at http://www.apache.org/licenses/LICENSE-2.0
"""


class EngineError(Exception):
    pass


class ComponentNotFound(EngineError):
    def __init__(self, component_id: str) -> None:
        super().__init__(f"component not found: {component_id}")
        self.component_id = component_id


class EventNotFound(EngineError):
    def __init__(self, event_id: str) -> None:
        super().__init__(f"event not found: {event_id}")
        self.event_id = event_id
