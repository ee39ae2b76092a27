"""
Question Paper Generation Pipeline
generation/

Steps:
1. Prompt Builder     — exam details + per-kind config + study text → instruction
2. GPT Client         — one single-turn completion per question kind
3. Response Parser    — labelled text blocks → GeneratedQuestion records
4. Orchestrator       — MCQ → short → long, all-or-nothing
5. Paper Summary      — requested vs delivered counts and marks
6. Paper Exporter     — question paper + answer sheet PDFs
"""
