import setuptools

setuptools.setup(
    name="mtg_staples_checklist",
    version="0.1",
    author="yochi",
    author_email="pedrogush@gmail.com",
    description="MTG staples checklist: rank format staples against your collection",
    packages=["controllers", "navigators", "repositories", "services", "utils"],
    py_modules=["main"],
    classifiers=["Programming Language :: Python :: 3", "Operating System :: OS Independent"],
    python_requires=">=3.11",
    install_requires=[
        "loguru",
        "curl_cffi",
        "beautifulsoup4",  # Web scraping MTGGoldfish and MTGTop8
        "lxml",  # Parser backend for beautifulsoup4
        "rapidfuzz",  # Fuzzy matching of the format argument
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["staples-checklist=main:main"]},
)
