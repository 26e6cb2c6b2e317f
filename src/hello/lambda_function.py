"""
Hello Lambda Function - Entry point for the greeter API.

This module is the function handler registered with the Lambda runtime. It
obtains the process-wide application context, delegates the event to the
orchestrator and flushes the logger before returning.
"""

import os
import sys
from typing import Any, Dict

# Add the greeter package to the Python path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from aws_lambda_powertools.metrics import MetricUnit
from aws_lambda_powertools.utilities.typing import LambdaContext

from greeter.handlers.app_context import get_app_context
from greeter.handlers.hello_handler import handle_event
from greeter.handlers.utils.observability import metrics, tracer


@metrics.log_metrics(capture_cold_start_metric=True)
@tracer.capture_lambda_handler
def lambda_handler(event: Dict[str, Any], context: LambdaContext) -> Dict[str, Any]:
    """
    Hello Lambda function handler.

    A StartupError raised while building the application context propagates to
    the Lambda runtime and fails the invocation.

    Args:
        event: Lambda event payload (API Gateway proxy event)
        context: Lambda context object

    Returns:
        API Gateway response
    """
    app = get_app_context()

    try:
        metrics.add_metric(name="RequestCount", unit=MetricUnit.Count, value=1)

        response = handle_event(event, context, app)

        if response["statusCode"] >= 500:
            metrics.add_metric(name="ErrorCount", unit=MetricUnit.Count, value=1)

        return response
    finally:
        app.logger.flush()
