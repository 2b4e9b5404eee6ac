import setuptools


with open("README.md") as fp:
    long_description = fp.read()


setuptools.setup(
    name="foundry-vtt-cdk",
    version="1.0.0",

    description="CDK app for a Foundry VTT server on ECS Fargate with EFS storage",
    long_description=long_description,
    long_description_content_type="text/markdown",

    package_dir={"": "cdk"},
    packages=setuptools.find_packages(where="cdk"),

    install_requires=[
        "aws-cdk-lib==2.195.0",
        "constructs>=10.0.0,<11.0.0",
    ],

    extras_require={
        "test": [
            "pytest>=7.4.0",
        ],
    },

    python_requires=">=3.10",

    classifiers=[
        "Development Status :: 4 - Beta",

        "Intended Audience :: Developers",

        "License :: OSI Approved :: Apache Software License",

        "Programming Language :: Python :: 3.10",

        "Topic :: Software Development :: Code Generators",
        "Topic :: Utilities",

        "Typing :: Typed",
    ],
)
