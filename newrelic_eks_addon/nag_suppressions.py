from cdk_nag import NagSuppressions

def add_nag_suppressions(stacks):
    """
    Add suppressions for cdk-nag findings
    """
    vpc_stack = next((stack for stack in stacks if stack.stack_name.endswith('NetworkStack')), None)
    if vpc_stack:
        NagSuppressions.add_resource_suppressions(
            vpc_stack, [
                {
                    "id": "AwsSolutions-VPC7",
                    "reason": "VPC Flow Logs are enabled in production but disabled in development for cost reasons"
                }
            ],
            apply_to_children=True
        )

    eks_stack = next((stack for stack in stacks if stack.stack_name.endswith('EksClusterStack')), None)
    if eks_stack:
        NagSuppressions.add_stack_suppressions(
            eks_stack,
            [
                {
                    "id": "AwsSolutions-EKS1",
                    "reason": "Public endpoint is required for development environment"
                },
                {
                    "id": "AwsSolutions-IAM4",
                    "reason": "AWS managed policies are required for EKS functionality"
                },
                {
                    "id": "AwsSolutions-IAM5",
                    "reason": "Secret ARNs end in a random suffix, the New Relic service accounts match it with a wildcard"
                },
                {
                    "id": "AwsSolutions-L1",
                    "reason": "Lambda runtime of the kubectl and Helm handlers is managed by CDK"
                },
                {
                    "id": "AwsSolutions-SF1",
                    "reason": "Step Functions logging is managed by CDK"
                },
                {
                    "id": "AwsSolutions-SF2",
                    "reason": "X-Ray tracing is not required for CDK-generated Step Functions"
                }
            ]
        )
