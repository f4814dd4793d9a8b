"""Response snapshots, declarative checks and fingerprint types for spotting web application firewalls."""