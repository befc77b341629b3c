"""
Command Line Tests
"""
import json
from unittest import mock

from labscan import cli
from labscan.models import AnalysisResult, ExtractionResult, ResultStatus


class TestCli:
    """Test the labscan command"""

    def test_prints_feedback(self, capsys):
        results = (ExtractionResult.success('x' * 40), AnalysisResult('Looks normal.'))
        with mock.patch.object(cli, 'analyze_report', return_value=results) as run:
            code = cli.main(['https://x.test/a.pdf', '--env', 'testing'])

        assert code == 0
        assert capsys.readouterr().out.strip() == 'Looks normal.'
        assert run.call_args.args[:2] == ('https://x.test/a.pdf', None)

    def test_json_output(self, capsys):
        results = (
            ExtractionResult.failure('PDF download failed', retryable=True),
            AnalysisResult('⚠ No readable text found in report.', status=ResultStatus.EMPTY),
        )
        with mock.patch.object(cli, 'analyze_report', return_value=results):
            code = cli.main(['https://x.test/a.pdf', '--json', '--env', 'testing'])

        assert code == 1
        data = json.loads(capsys.readouterr().out)
        assert data['extraction']['status'] == 'failed'
        assert data['analysis']['feedback'] == '⚠ No readable text found in report.'
        assert data['analysis']['status'] == 'empty'

    def test_extract_only(self, capsys):
        with mock.patch.object(cli, 'extract_document_text', return_value=ExtractionResult.success('LDL 130')) as ext, \
                mock.patch.object(cli, 'analyze_report') as run:
            code = cli.main(['https://x.test/scan', '--type', 'image', '--extract-only', '--env', 'testing'])

        assert code == 0
        run.assert_not_called()
        assert ext.call_args.args[:2] == ('https://x.test/scan', 'image')
        assert capsys.readouterr().out.strip() == 'LDL 130'

    def test_extract_only_failure_exit_code(self, capsys):
        failed = ExtractionResult.failure('Unsupported file type')
        with mock.patch.object(cli, 'extract_document_text', return_value=failed):
            code = cli.main(['https://x.test/notes.docx', '--extract-only', '--env', 'testing'])

        assert code == 1
        assert 'Unsupported file type' in capsys.readouterr().out
