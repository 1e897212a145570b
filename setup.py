from setuptools import find_packages, setup


def get_version():
    with open("m3u_entrypoint/__init__.py") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().replace('"', "").replace("'", "")
    raise RuntimeError("No version found!")


setup(
    name="m3u-proxy-entrypoint",
    version=get_version(),
    description="Container entrypoint and preflight diagnostics for the m3u-proxy service",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "loguru",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "m3u-proxy-entrypoint=m3u_entrypoint.core.launcher.entrypoint:main",
            "m3u-entrypoint=m3u_entrypoint.cli.main:main",
        ]
    },
    python_requires=">=3.8",
    include_package_data=True,
    zip_safe=False,
)
