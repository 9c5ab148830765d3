# setup.py
from setuptools import setup, find_packages

setup(
    name="sandesh",
    version="1.0.0",
    description="Logger etiquetado con archivo de log limitado a 1 MiB y notificaciones toast",
    author="Sandesh Developers",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "sandesh": ["interface/locales/*.json"],
    },
    python_requires=">=3.8",
    install_requires=[
        "customtkinter",  # Toasts de escritorio (sandesh.interface.gui)
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
