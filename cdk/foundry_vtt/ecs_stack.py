import aws_cdk as cdk
from aws_cdk import (
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_ecs_patterns as ecs_patterns,
)

from foundry_vtt.config import StackConfig
from foundry_vtt.exports import ExportRegistry
from foundry_vtt.resources import add_resource_group


SAMPLE_IMAGE = "amazon/amazon-ecs-sample"


class EcsStack(cdk.Stack):
    """Load-balanced Fargate service running the ECS sample image.

    No storage, secrets or custom health check; useful to check an account
    can run the cluster before deploying Foundry itself.
    """

    def __init__(self, scope, construct_id, config: StackConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        config.apply_tags(self)

        add_resource_group(self, config, ExportRegistry(config))

        self.vpc = ec2.Vpc(self, "VPC", max_azs=3)
        self.cluster = ecs.Cluster(self, "Cluster", vpc=self.vpc)

        self.service = ecs_patterns.ApplicationLoadBalancedFargateService(
            self,
            "Service",
            cluster=self.cluster,
            cpu=512,
            memory_limit_mib=2048,
            desired_count=6,
            task_image_options=ecs_patterns.ApplicationLoadBalancedTaskImageOptions(
                image=ecs.ContainerImage.from_registry(SAMPLE_IMAGE),
            ),
            public_load_balancer=True,
        )
