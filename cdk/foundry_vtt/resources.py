import aws_cdk as cdk
from aws_cdk import (
    aws_cloudfront as cloudfront,
    aws_cloudfront_origins as origins,
    aws_ec2 as ec2,
    aws_ecs as ecs,
    aws_ecs_patterns as ecs_patterns,
    aws_efs as efs,
    aws_elasticloadbalancingv2 as elbv2,
    aws_iam as iam,
    aws_logs as logs,
    aws_resourcegroups as resourcegroups,
    aws_secretsmanager as secretsmanager,
)
from constructs import Construct

from foundry_vtt.config import PROJECT_TAG_KEY, STAGE_TAG_KEY, StackConfig
from foundry_vtt.exports import ExportKey, ExportRegistry


CONTAINER_NAME = "foundryvtt"
CONTAINER_PORT = 30000
DATA_VOLUME = "efs"
DATA_PATH = "/data"

TASK_CPU = 2048
TASK_MEMORY_MIB = 4096

# Environment variable -> key inside the secret
SECRET_FIELDS = {
    "FOUNDRY_USERNAME": "foundry-username",
    "FOUNDRY_PASSWORD": "foundryvtt-password",
    "FOUNDRY_ADMIN_KEY": "foundryvtt-admin-key",
}

HEALTH_CHECK_PATH = "/api/status"
DEREGISTRATION_DELAY_SECONDS = 30


def add_resource_group(
    scope: Construct, config: StackConfig, registry: ExportRegistry
) -> resourcegroups.CfnGroup:
    """Group every resource carrying this stage/project's tags."""
    group = resourcegroups.CfnGroup(
        scope,
        "ResourceGroup",
        name=config.prefix,
        resource_query=resourcegroups.CfnGroup.ResourceQueryProperty(
            type="TAG_FILTERS_1_0",
            query=resourcegroups.CfnGroup.QueryProperty(
                resource_type_filters=["AWS::AllSupported"],
                tag_filters=[
                    resourcegroups.CfnGroup.TagFilterProperty(
                        key=PROJECT_TAG_KEY, values=[config.project]
                    ),
                    resourcegroups.CfnGroup.TagFilterProperty(
                        key=STAGE_TAG_KEY, values=[config.stage]
                    ),
                ],
            ),
        ),
    )
    registry.export(
        scope,
        "ResourceGroupName",
        ExportKey.RESOURCE_GROUP,
        config.prefix,
        "Resource Group Name",
    )
    return group


def create_file_system(scope: Construct, vpc: ec2.IVpc) -> efs.FileSystem:
    """Encrypted EFS for world data, mountable only through its mount targets."""
    file_system = efs.FileSystem(
        scope,
        "FoundryFilesystem",
        vpc=vpc,
        vpc_subnets=ec2.SubnetSelection(subnet_type=ec2.SubnetType.PUBLIC),
        encrypted=True,
        lifecycle_policy=efs.LifecyclePolicy.AFTER_14_DAYS,
        performance_mode=efs.PerformanceMode.GENERAL_PURPOSE,
        throughput_mode=efs.ThroughputMode.BURSTING,
    )
    file_system.add_to_resource_policy(
        iam.PolicyStatement(
            effect=iam.Effect.ALLOW,
            actions=["elasticfilesystem:ClientMount"],
            principals=[iam.AnyPrincipal()],
            conditions={
                "Bool": {
                    "elasticfilesystem:AccessedViaMountTarget": "true",
                },
            },
        )
    )
    return file_system


def lookup_secret(scope: Construct, config: StackConfig) -> secretsmanager.ISecret:
    if config.secret_arn:
        return secretsmanager.Secret.from_secret_complete_arn(
            scope, "FoundrySecret", config.secret_arn
        )
    return secretsmanager.Secret.from_secret_name_v2(
        scope, "FoundrySecret", config.secret_name
    )


def create_foundry_service(
    scope: Construct,
    config: StackConfig,
    cluster: ecs.ICluster,
    file_system: efs.IFileSystem,
    assign_public_ip: bool = False,
) -> ecs_patterns.ApplicationLoadBalancedFargateService:
    secret = lookup_secret(scope, config)

    # Task definition with the shared filesystem as a volume
    task_definition = ecs.FargateTaskDefinition(
        scope,
        "TaskDefinition",
        cpu=TASK_CPU,
        memory_limit_mib=TASK_MEMORY_MIB,
        volumes=[
            ecs.Volume(
                name=DATA_VOLUME,
                efs_volume_configuration=ecs.EfsVolumeConfiguration(
                    file_system_id=file_system.file_system_id,
                ),
            ),
        ],
    )

    # CloudWatch Log Group for the container
    log_group = logs.LogGroup(
        scope,
        "FoundryLogGroup",
        log_group_name=f"/aws/ecs/{config.prefix.lower()}",
        retention=logs.RetentionDays.ONE_WEEK,
        removal_policy=cdk.RemovalPolicy.DESTROY,
    )

    container = ecs.ContainerDefinition(
        scope,
        "ContainerDefinition",
        container_name=CONTAINER_NAME,
        image=ecs.ContainerImage.from_registry(config.image),
        task_definition=task_definition,
        logging=ecs.LogDrivers.aws_logs(
            stream_prefix=CONTAINER_NAME, log_group=log_group
        ),
        secrets={
            env_name: ecs.Secret.from_secrets_manager(secret, field)
            for env_name, field in SECRET_FIELDS.items()
        },
    )
    container.add_mount_points(
        ecs.MountPoint(
            source_volume=DATA_VOLUME,
            container_path=DATA_PATH,
            read_only=False,
        )
    )
    container.add_port_mappings(ecs.PortMapping(container_port=CONTAINER_PORT))

    service = ecs_patterns.ApplicationLoadBalancedFargateService(
        scope,
        "FoundryService",
        cluster=cluster,
        task_definition=task_definition,
        desired_count=1,
        public_load_balancer=True,
        assign_public_ip=assign_public_ip,
    )

    service.target_group.set_attribute(
        "deregistration_delay.timeout_seconds", str(DEREGISTRATION_DELAY_SECONDS)
    )
    service.target_group.configure_health_check(
        path=HEALTH_CHECK_PATH,
        port=str(CONTAINER_PORT),
        healthy_http_codes="200",
        healthy_threshold_count=2,
        unhealthy_threshold_count=2,
        timeout=cdk.Duration.seconds(5),
        interval=cdk.Duration.seconds(10),
    )

    # Root access for the task, NFS from the service into the filesystem
    file_system.grant_root_access(service.task_definition.task_role.grant_principal)
    file_system.connections.allow_default_port_from(service.service.connections)

    return service


def create_distribution(
    scope: Construct,
    config: StackConfig,
    registry: ExportRegistry,
    load_balancer: elbv2.IApplicationLoadBalancer,
) -> cloudfront.Distribution:
    """CloudFront in front of the load balancer. Only used with ENABLE_CDN."""
    distribution = cloudfront.Distribution(
        scope,
        "CloudFront",
        comment=(
            f"The {config.stage} Cloud Front Distribution for the "
            f"{config.project} service."
        ),
        default_behavior=cloudfront.BehaviorOptions(
            cache_policy=cloudfront.CachePolicy.CACHING_OPTIMIZED,
            origin=origins.LoadBalancerV2Origin(
                load_balancer,
                protocol_policy=cloudfront.OriginProtocolPolicy.HTTP_ONLY,
                http_port=80,
            ),
        ),
    )
    registry.export(
        scope,
        "CloudFrontDomainName",
        ExportKey.CLOUDFRONT_DOMAIN_NAME,
        distribution.domain_name,
        "CloudFront Domain Name",
    )
    return distribution
