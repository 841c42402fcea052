from abort_incomplete_multipart.abort import abort_multipart_uploads

PROMPT = "Are you sure you want to abort these multipart uploads? (yes/no) "


def confirm_abort():
    """Ask the operator on stdin; only the exact answer 'yes' confirms."""
    try:
        answer = input(PROMPT)
    except EOFError:
        # stdin closed before an answer was given
        print()
        return False
    return answer == 'yes'


def handle_abort_request(s3_client, results, abort=False, force=False):
    """Abort the discovered uploads if asked to, prompting unless forced.

    Returns the number of abort requests issued, or None when nothing was aborted.
    """
    if not abort:
        print("To actually abort these incomplete uploads, pass the --abort flag")
        return None

    if not force and not confirm_abort():
        print("Okay, not aborting anything.")
        return None

    return abort_multipart_uploads(s3_client, results)
