"""Components layer - leaf domain logic modules.

Components are leaf modules that:
- Do NOT import services, workflows, or interfaces
- ARE imported and used BY workflows and services
- May import from: helpers, other components

Architecture:
- helpers/ = stdlib-only utilities and DTOs (pure, stateless)
- components/ = domain logic building blocks (this layer)
- workflows/ = orchestration of components
- services/ = DI, wiring, long-lived resources
- interfaces/ = HTTP/CLI presentation
"""
