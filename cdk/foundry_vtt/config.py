import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass

import aws_cdk as cdk


logger = logging.getLogger(__name__)

DEFAULT_STAGE = "Dev"
DEFAULT_PROJECT = "FoundryVtt"
DEFAULT_MAX_AZS = 2
# CDK only sees two zones when account or region is unknown at synth
AGNOSTIC_MAX_AZS = 2
DEFAULT_IMAGE = "felddy/foundryvtt:release"
DEFAULT_SECRET_NAME = "foundry-data"

DEPLOYMENT_LAYERED = "layered"
DEPLOYMENT_COMBINED = "combined"
DEPLOYMENT_SAMPLE = "sample"
DEPLOYMENTS = (DEPLOYMENT_LAYERED, DEPLOYMENT_COMBINED, DEPLOYMENT_SAMPLE)

PROJECT_TAG_KEY = "project"
STAGE_TAG_KEY = "stage"

TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class StackConfig:
    """Deployment context shared by every stack.

    Resolved once from the environment and handed to each stack constructor.
    Every resource name and export key is derived from ``stage`` and
    ``project``.
    """

    stage: str = DEFAULT_STAGE
    project: str = DEFAULT_PROJECT
    max_azs: int = DEFAULT_MAX_AZS
    image: str = DEFAULT_IMAGE
    secret_name: str = DEFAULT_SECRET_NAME
    secret_arn: str | None = None
    enable_cdn: bool = False
    deployment: str = DEPLOYMENT_LAYERED
    account: str | None = None
    region: str | None = None

    def __post_init__(self) -> None:
        # A public load balancer needs subnets in two zones
        if self.max_azs < 2:
            raise ValueError(f"MAX_AZS must be at least 2, got {self.max_azs}")
        # Importing stacks assume exactly max_azs subnets were exported
        if self.is_environment_agnostic and self.max_azs > AGNOSTIC_MAX_AZS:
            raise ValueError(
                f"MAX_AZS above {AGNOSTIC_MAX_AZS} needs AWS_ACCOUNT_ID and "
                f"AWS_DEFAULT_REGION, got {self.max_azs}"
            )

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "StackConfig":
        if environ is None:
            environ = os.environ

        def get(name: str, default=None):
            # Empty values fall back to the default, like an unset variable
            value = environ.get(name)
            if not value:
                logger.debug(f"{name} not set, using default {default!r}")
                return default
            return value

        deployment = get("DEPLOYMENT", DEPLOYMENT_LAYERED).lower()
        if deployment not in DEPLOYMENTS:
            raise ValueError(
                f"DEPLOYMENT must be one of {', '.join(DEPLOYMENTS)}, got {deployment!r}"
            )

        raw_max_azs = get("MAX_AZS", str(DEFAULT_MAX_AZS))
        try:
            max_azs = int(raw_max_azs)
        except ValueError:
            raise ValueError(
                f"MAX_AZS must be an integer, got {raw_max_azs!r}"
            ) from None

        config = cls(
            stage=get("STAGE", DEFAULT_STAGE),
            project=get("PROJECT", DEFAULT_PROJECT),
            max_azs=max_azs,
            image=get("FOUNDRY_IMAGE", DEFAULT_IMAGE),
            secret_name=get("FOUNDRY_SECRET_NAME", DEFAULT_SECRET_NAME),
            secret_arn=get("FOUNDRY_SECRET_ARN"),
            enable_cdn=get("ENABLE_CDN", "").lower() in TRUTHY,
            deployment=deployment,
            account=get("AWS_ACCOUNT_ID"),
            region=get("AWS_DEFAULT_REGION"),
        )
        logger.info(
            f"Resolved deployment context: stage={config.stage} "
            f"project={config.project} deployment={config.deployment}"
        )
        return config

    @property
    def prefix(self) -> str:
        return f"{self.stage}-{self.project}"

    @property
    def tags(self) -> dict[str, str]:
        return {PROJECT_TAG_KEY: self.project, STAGE_TAG_KEY: self.stage}

    @property
    def is_environment_agnostic(self) -> bool:
        return self.account is None or self.region is None

    @property
    def environment(self) -> cdk.Environment | None:
        if self.account is None and self.region is None:
            return None
        return cdk.Environment(account=self.account, region=self.region)

    def stack_id(self, name: str) -> str:
        return f"{self.prefix}-{name}Stack"

    def apply_tags(self, scope) -> None:
        """Tag everything under ``scope`` for resource grouping and billing."""
        for key, value in self.tags.items():
            cdk.Tags.of(scope).add(key, value)
