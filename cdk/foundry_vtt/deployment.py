import logging

import aws_cdk as cdk

from foundry_vtt.config import (
    DEPLOYMENT_COMBINED,
    DEPLOYMENT_LAYERED,
    DEPLOYMENT_SAMPLE,
    StackConfig,
)
from foundry_vtt.ecs_stack import EcsStack
from foundry_vtt.filesystem_stack import FilesystemStack
from foundry_vtt.foundry_stack import FoundryServiceStack, FoundryStack
from foundry_vtt.network_stack import NetworkStack


logger = logging.getLogger(__name__)


def build(app: cdk.App, config: StackConfig) -> list[cdk.Stack]:
    """Declare the stacks for ``config.deployment``, in dependency order."""
    env = config.environment

    if config.deployment == DEPLOYMENT_COMBINED:
        stacks = [
            FoundryStack(
                app,
                f"{config.prefix}Stack",
                config=config,
                description="Foundry ECS Stack",
                env=env,
            ),
        ]
    elif config.deployment == DEPLOYMENT_SAMPLE:
        stacks = [
            EcsStack(
                app,
                config.stack_id("Ecs"),
                config=config,
                description="Foundry sample ECS Stack",
                env=env,
            ),
        ]
    elif config.deployment == DEPLOYMENT_LAYERED:
        network = NetworkStack(
            app,
            config.stack_id("Network"),
            config=config,
            description="Foundry network",
            env=env,
        )
        filesystem = FilesystemStack(
            app,
            config.stack_id("Filesystem"),
            config=config,
            description="Foundry shared filesystem",
            env=env,
        )
        service = FoundryServiceStack(
            app,
            config.stack_id("Foundry"),
            config=config,
            description="Foundry ECS service",
            env=env,
        )

        # Values only flow through exports, so the order has to be explicit
        filesystem.add_dependency(network)
        service.add_dependency(network)
        service.add_dependency(filesystem)
        stacks = [network, filesystem, service]
    else:
        raise ValueError(f"Unknown deployment {config.deployment!r}")

    for stack in stacks:
        logger.info(f"Declared stack {stack.stack_name}")
    return stacks
