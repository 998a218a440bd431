"""Controllers package for the routine planner.

This package provides a modular controller architecture with domain-specific
controllers orchestrated by the ApplicationController.

Main Components:
    ApplicationController: Main orchestrator that owns the editor state
    TaskController: Task list edits and change notification
    ViewController: Zoom buttons, view reset and viewport change notification
    ExportController: JSON document and PNG image export/import

Usage:
    from controllers import ApplicationController

    controller = ApplicationController()
    controller.execute_command('add_task', template={'name': 'Gym', 'start': 7})
    data = controller.on_request_export()
"""

from controllers.application_controller import ApplicationController
from controllers.task_controller import TaskController
from controllers.view_controller import ViewController
from controllers.export_controller import ExportController

# Only export the main ApplicationController
# Internal controllers are implementation details
__all__ = ['ApplicationController']
