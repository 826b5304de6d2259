#!/usr/bin/env python3

from setuptools import setup
import os


directory = os.path.dirname(os.path.realpath(__file__))


if __name__ == "__main__":
    setup(
        name="glslext",
        packages=["glslext"],
        python_requires='>3.10.0',
        version="0.1.0",
        license="MIT",
        description="GLSL source preprocessor: #include headers, version and defines",
        long_description=open(os.path.join(
            directory, "README.md"), "r", encoding="utf8").read(),
        long_description_content_type="text/markdown",
        keywords=["glsl", "shader", "preprocessor"],
        classifiers=[],
        install_requires=[
            "PyOpenGL>=3.1",
            "glfw>=2.5.0",
        ],
        extras_require={
            "test": ["pytest"],
        },
        entry_points={
            "console_scripts": [
                "glslext=glslext.__main__:main",
            ],
        },
        zip_safe=False,
    )
