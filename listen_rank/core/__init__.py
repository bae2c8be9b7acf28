"""
Core modules (line classifier, log builder, counter, ranker, artist extractor, report).

Everything here is pure logic over text lines; file and terminal I/O live in
`listen_rank.cli` and `listen_rank.web.app`. Import submodules directly:
- `listen_rank.core.parser`
- `listen_rank.core.log`
- `listen_rank.core.counter`
- `listen_rank.core.ranking`
- `listen_rank.core.artists`
- `listen_rank.core.report`
"""

__all__ = []
