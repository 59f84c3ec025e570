from setuptools import setup

setup(
    name="evc",
    version="0.1.0",
    description="Compiles PascalCase component tags in templates to ERB render calls",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    packages=['evc'],
    python_requires=">=3.6",
    install_requires=[
        "watchdog",
        "pyyaml"
    ],
    extras_require={
        "test": ["pytest"],
    },
)
