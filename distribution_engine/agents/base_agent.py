"""Tüm agentlar için temel sınıf - karar kaydı ve AWS denetim izi."""

from __future__ import annotations

import json
import logging
import os
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Optional

import boto3
from botocore.exceptions import ClientError

from distribution_engine.config import ConfigStore
from distribution_engine.models.decisions import AgentDecision

logger = logging.getLogger(__name__)

DEFAULT_DECISIONS_TABLE = "AgentDecisions"


class BaseAgent(ABC):
    """Motoru çağıran, kararlarını DynamoDB/S3'e loglayan agent temel sınıfı.

    Motorun kendisi I/O yapmaz; kalıcılık yalnızca bu katmandadır ve
    kalıcılık hataları değerlendirmeyi başarısız kılmaz.
    """

    def __init__(
        self,
        agent_name: str,
        region_name: str = "us-east-1",
        config_store: Optional[ConfigStore] = None,
        dynamodb_resource: Optional[Any] = None,
        s3_client: Optional[Any] = None,
        decisions_table_name: str = DEFAULT_DECISIONS_TABLE,
        log_bucket: Optional[str] = None,
    ):
        self.agent_name = agent_name
        self.region_name = region_name
        self.config_store = config_store or ConfigStore()

        # AWS istemcileri - dependency injection destekli
        self.dynamodb = dynamodb_resource or boto3.resource(
            "dynamodb", region_name=region_name
        )
        self.s3 = s3_client or boto3.client("s3", region_name=region_name)

        self.decisions_table = self.dynamodb.Table(decisions_table_name)
        self._s3_bucket_name = log_bucket or os.environ.get("DECISION_LOG_BUCKET")

        self._decisions: list[AgentDecision] = []

        logger.info("Agent başlatıldı: %s", agent_name)

    @property
    def decisions(self) -> list[AgentDecision]:
        return list(self._decisions)

    def log_decision(
        self,
        decision_type: str,
        input_data: dict,
        output_data: dict,
        reasoning: str,
    ) -> AgentDecision:
        """Agent kararını loglar ve DynamoDB'ye kaydeder."""
        decision = AgentDecision(
            decision_id=str(uuid.uuid4()),
            agent_name=self.agent_name,
            decision_type=decision_type,
            input_data=input_data,
            output_data=output_data,
            reasoning=reasoning,
        )
        self._decisions.append(decision)

        try:
            self.decisions_table.put_item(
                Item={
                    "decision_id": decision.decision_id,
                    "agent_name": decision.agent_name,
                    "decision_type": decision.decision_type,
                    "input_data": json.dumps(input_data, default=str),
                    "output_data": json.dumps(output_data, default=str),
                    "reasoning": reasoning,
                    "timestamp": decision.timestamp,
                }
            )
        except ClientError as e:
            logger.warning("Karar loglama hatası: %s", e)

        if self._s3_bucket_name:
            self.log_to_s3(
                {
                    "decision_id": decision.decision_id,
                    "agent_name": decision.agent_name,
                    "decision_type": decision_type,
                    "input_data": input_data,
                    "output_data": output_data,
                    "reasoning": reasoning,
                    "timestamp": decision.timestamp,
                },
                prefix=f"{decision_type}-",
            )

        return decision

    def log_to_s3(self, log_data: dict, prefix: str = "") -> None:
        """Agent logunu S3'e kaydeder."""
        timestamp = datetime.utcnow().strftime("%Y-%m-%dT%H-%M-%S")
        key = f"agent-logs/{self.agent_name.lower().replace(' ', '-')}/{prefix}{timestamp}.json"
        try:
            self.s3.put_object(
                Bucket=self._s3_bucket_name,
                Key=key,
                Body=json.dumps(log_data, default=str),
            )
        except ClientError as e:
            logger.warning("S3 log hatası: %s", e)

    @abstractmethod
    def process(self, *args: Any, **kwargs: Any) -> Any:
        """Her agent kendi iş mantığını implement eder."""
        ...
