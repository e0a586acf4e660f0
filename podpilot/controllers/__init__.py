"""Controllers for PodPilot.

Import concrete controllers from their modules, e.g.
``from podpilot.controllers.session import PodSession``.
"""
