"""
SNS publisher for submission events.

Initialised once per app like the other extensions. The boto3 client is built
from the app config in ``init_app`` and can be replaced (tests inject a fake).
"""
from __future__ import annotations
import json
import logging
from typing import Any, Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

logger = logging.getLogger(__name__)


class NotificationError(Exception):
    """Publishing to the topic failed."""


class SnsNotifier:
    def __init__(self, app=None):
        self.client = None
        self.topic_arn: Optional[str] = None
        self.enabled = False
        if app is not None:
            self.init_app(app)

    def init_app(self, app) -> None:
        self.topic_arn = app.config.get("SNS_TOPIC_ARN")
        self.enabled = bool(app.config.get("NOTIFICATIONS_ENABLED"))
        if self.enabled:
            kw = {"region_name": app.config.get("AWS_REGION", "us-east-1")}
            if app.config.get("AWS_ENDPOINT_URL"):
                kw["endpoint_url"] = app.config["AWS_ENDPOINT_URL"]
            self.client = boto3.client("sns", **kw)
        app.extensions["sns_notifier"] = self

    def publish(self, event: Dict[str, Any], topic_arn: Optional[str] = None) -> Optional[str]:
        """
        Publish ``event`` as a JSON message.

        Returns the SNS message id, or None when notifications are disabled.
        Raises NotificationError on any transport failure.
        """
        if not self.enabled:
            logger.info("notifications disabled, dropping event %s", event)
            return None

        arn = topic_arn or self.topic_arn
        if not arn:
            raise NotificationError("SNS topic ARN is not configured")

        try:
            resp = self.client.publish(TopicArn=arn, Message=json.dumps(event))
        except ClientError as e:
            code = e.response.get("Error", {}).get("Code", "Unknown")
            logger.error("SNS publish failed: %s - %s", code, e)
            raise NotificationError(code) from e
        except BotoCoreError as e:
            logger.error("SNS publish failed: %s", e)
            raise NotificationError(str(e)) from e

        message_id = resp.get("MessageId")
        logger.info("published submission event to %s (message_id=%s)", arn, message_id)
        return message_id
