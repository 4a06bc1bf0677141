from __future__ import annotations

from setuptools import find_packages, setup


def load_dependencies() -> list[str]:
    """Assemble install_requires for the gateway."""
    return [
        # Core MCP and HTTP
        "mcp>=1.13.1,<2",
        "aiohttp>=3.8.0",
        # Streamable HTTP transport
        "starlette>=0.27.0",
        "uvicorn>=0.23.0",
        # Data handling
        "pydantic>=2.0.0",
    ]


setup(
    name="unifi-protect-mcp",
    version="0.1.0",
    description="MCP server exposing UniFi Protect and UniFi Network operations as tools",
    python_requires=">=3.10",
    package_dir={"": "src"},
    packages=find_packages("src"),
    install_requires=load_dependencies(),
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "unifi-protect-mcp=unifi_protect_mcp.main:run",
        ],
    },
)
