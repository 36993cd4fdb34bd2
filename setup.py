import setuptools

with open("README.md", "r", encoding="utf-8") as fh:
  long_description = fh.read()

REQUIRED_PACKAGES = [
  'httpx',
  'tiktoken'
]

TEST_PACKAGES = [
  'pytest',
  'respx'
]

setuptools.setup(
  name="openai-http-sdk",
  version="0.1.0",
  author="ProgVM",
  author_email="progvminc@example.com",
  description="A small synchronous client for the OpenAI HTTP API, including the assistants workflow.",
  long_description=long_description,
  long_description_content_type="text/markdown",
  packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
  install_requires=REQUIRED_PACKAGES,
  extras_require={"test": TEST_PACKAGES},
  classifiers=[
    "Programming Language :: Python :: 3",
    "License :: OSI Approved :: MIT License",
    "Operating System :: OS Independent",
    "Intended Audience :: Developers",
    "Topic :: Software Development :: Libraries :: Python Modules",
    "Topic :: Scientific/Engineering :: Artificial Intelligence"
  ],
  python_requires='>=3.9',
)
