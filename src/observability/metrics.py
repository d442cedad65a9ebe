METRICS = {
    "upload_batches": 0,
    "upload_files_total": 0,
    "upload_rejected": 0,
    "upload_file_successes": 0,
    "upload_file_failures": 0,
}

def inc(key, value=1):
    METRICS[key] = METRICS.get(key, 0) + value

def snapshot():
    return dict(METRICS)

def reset():
    for key in METRICS:
        METRICS[key] = 0
