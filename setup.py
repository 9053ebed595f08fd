from setuptools import setup, find_packages

setup(
    name='flashdeck',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages('src'),
    install_requires=[
        'click>=8.0',
        'rich>=13.0',
        'pyyaml>=6.0',
        'requests>=2.28',
    ],
    extras_require={
        'tui': [
            'textual>=0.40',
            'questionary>=2.0',
        ],
        'audio': [
            'SpeechRecognition>=3.10',
            'PyAudio>=0.2.13',
        ],
        'test': [
            'pytest>=7.0',
        ],
    },
    entry_points={
        'console_scripts': [
            'flashdeck=flashdeck.cli:main',
        ],
    },
    author='Logan Rooks',
    author_email='logansrooks@gmail.com',
    description='Generate, review and study AI flashcard decks from the command line',
    long_description=open('README.md').read(),
    long_description_content_type='text/markdown',
    url='https://github.com/loganrooks/flashdeck',
    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
    python_requires='>=3.10',
)
