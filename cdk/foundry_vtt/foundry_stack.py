import aws_cdk as cdk
from aws_cdk import (
    aws_ec2 as ec2,
    aws_ecs as ecs,
)

from foundry_vtt.config import StackConfig
from foundry_vtt.exports import ExportRegistry
from foundry_vtt.resources import (
    add_resource_group,
    create_distribution,
    create_file_system,
    create_foundry_service,
)


class FoundryServiceStack(cdk.Stack):
    """Foundry on Fargate using the network and filesystem stacks' exports."""

    def __init__(self, scope, construct_id, config: StackConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        config.apply_tags(self)
        registry = ExportRegistry(config)

        add_resource_group(self, config, registry)

        self.vpc = registry.import_vpc(self, "VPC")
        self.file_system = registry.import_file_system(self, "FileSystem")

        self.cluster = ecs.Cluster(self, "Cluster", vpc=self.vpc)
        self.service = create_foundry_service(
            self,
            config,
            self.cluster,
            self.file_system,
            # No NAT in the shared network, tasks pull images over public IPs
            assign_public_ip=True,
        )

        self.distribution = None
        if config.enable_cdn:
            self.distribution = create_distribution(
                self, config, registry, self.service.load_balancer
            )


class FoundryStack(cdk.Stack):
    """Self-contained Foundry deployment: network, filesystem and service."""

    def __init__(self, scope, construct_id, config: StackConfig, **kwargs) -> None:
        super().__init__(scope, construct_id, **kwargs)
        config.apply_tags(self)
        registry = ExportRegistry(config)

        add_resource_group(self, config, registry)

        self.vpc = ec2.Vpc(self, "Vpc", max_azs=config.max_azs)
        self.file_system = create_file_system(self, self.vpc)

        self.cluster = ecs.Cluster(self, "DefaultEcsCluster", vpc=self.vpc)
        self.service = create_foundry_service(
            self, config, self.cluster, self.file_system
        )

        self.distribution = None
        if config.enable_cdn:
            self.distribution = create_distribution(
                self, config, registry, self.service.load_balancer
            )
