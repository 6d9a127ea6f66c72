"""
Reference content for the Vaccine Lot Release (VLR) competency framework.

Loaded by the `seed_vlr` management command.
"""

LEVELS = [
    {'level_number': 1, 'name': 'Foundation', 'benchmark_score': 50,
     'description': 'Understands core concepts; can perform tasks with guidance'},
    {'level_number': 2, 'name': 'Advanced', 'benchmark_score': 70,
     'description': 'Applies knowledge independently; handles standard situations'},
    {'level_number': 3, 'name': 'Expert', 'benchmark_score': 85,
     'description': 'Leads others; handles complex scenarios; shapes policy'},
]

DOMAIN = {
    'code': 'VLR',
    'name': 'Vaccine Lot Release Regulation',
    'description': 'Competencies for regulatory assessment and lot release of vaccines',
    'framework_alignment': ['WHO TRS 978 Annex 2', 'SAHPGL-PEM-BIO-01', 'ICH Q9', 'PIC/S'],
}

AREAS = [
    ('VLR-01', 'Vaccine Platforms & Technologies',
     'Understanding of vaccine platform types and manufacturing principles'),
    ('VLR-02', 'Upstream Processing',
     'Cell culture, fermentation, and upstream manufacturing processes'),
    ('VLR-03', 'Downstream Processing',
     'Purification, clarification, and viral clearance processes'),
    ('VLR-04', 'Formulation & Fill-Finish',
     'Aseptic processing, fill-finish operations, and contamination control'),
    ('VLR-05', 'Critical Quality Attributes (CQAs)',
     'Assessment of product quality attributes and specifications'),
    ('VLR-06', 'Critical Process Parameters (CPPs)',
     'Process control, monitoring, and deviation management'),
    ('VLR-07', 'Lot Summary Protocol (LSP) Review',
     'Review and evaluation of manufacturing documentation'),
    ('VLR-08', 'Regulatory Decision-Making',
     'Risk-based decision frameworks and regulatory actions'),
    ('VLR-09', 'Quality by Design (QbD)',
     'QbD principles, design space, and lifecycle management'),
    ('VLR-10', 'International Regulatory Harmonization',
     'Global regulatory frameworks and reliance pathways'),
]

# (item code, level number, description); the area code is the item code prefix
ITEMS = [
    ('VLR-01-L1-01', 1, 'Identify traditional vaccine platform types (live attenuated, inactivated, subunit, conjugate)'),
    ('VLR-01-L1-02', 1, 'Describe basic manufacturing principles per platform'),
    ('VLR-01-L2-01', 2, 'Compare manufacturing processes across platforms'),
    ('VLR-01-L2-02', 2, 'Evaluate platform-specific quality considerations'),
    ('VLR-01-L3-01', 3, 'Assess emerging technology regulatory implications (mRNA, viral vector)'),
    ('VLR-01-L3-02', 3, 'Design platform-specific regulatory strategies'),

    ('VLR-02-L1-01', 1, 'Describe cell culture and fermentation fundamentals'),
    ('VLR-02-L1-02', 1, 'Identify critical upstream parameters (temperature, pH, DO, agitation)'),
    ('VLR-02-L2-01', 2, 'Analyze bioreactor data for compliance'),
    ('VLR-02-L2-02', 2, 'Evaluate cell line qualification documentation'),
    ('VLR-02-L3-01', 3, 'Assess upstream deviation impact on product quality'),
    ('VLR-02-L3-02', 3, 'Design risk-based upstream monitoring strategies'),

    ('VLR-03-L1-01', 1, 'Describe purification and clarification methods'),
    ('VLR-03-L1-02', 1, 'Identify downstream critical process parameters'),
    ('VLR-03-L2-01', 2, 'Analyze chromatography and filtration data'),
    ('VLR-03-L2-02', 2, 'Evaluate viral clearance validation studies'),
    ('VLR-03-L3-01', 3, 'Assess downstream process changes and comparability'),
    ('VLR-03-L3-02', 3, 'Design process validation strategies'),

    ('VLR-04-L1-01', 1, 'Describe aseptic processing requirements'),
    ('VLR-04-L1-02', 1, 'Identify fill-finish critical parameters'),
    ('VLR-04-L2-01', 2, 'Evaluate environmental monitoring data'),
    ('VLR-04-L2-02', 2, 'Analyze container closure integrity data'),
    ('VLR-04-L3-01', 3, 'Assess facility and equipment qualification'),
    ('VLR-04-L3-02', 3, 'Design contamination control strategies'),

    ('VLR-05-L1-01', 1, 'Define CQA tiers and their significance'),
    ('VLR-05-L1-02', 1, 'Identify Tier 1 safety-critical CQAs'),
    ('VLR-05-L2-01', 2, 'Interpret CQA test results and specifications'),
    ('VLR-05-L2-02', 2, 'Evaluate OOS results and their implications'),
    ('VLR-05-L3-01', 3, 'Assess CQA-CPP relationships'),
    ('VLR-05-L3-02', 3, 'Design risk-based CQA assessment strategies'),

    ('VLR-06-L1-01', 1, 'Define CPPs and their relationship to CQAs'),
    ('VLR-06-L1-02', 1, 'Identify stage-specific CPPs'),
    ('VLR-06-L2-01', 2, 'Analyze CPP trends and control charts'),
    ('VLR-06-L2-02', 2, 'Evaluate process deviation impact'),
    ('VLR-06-L3-01', 3, 'Assess design space and process robustness'),
    ('VLR-06-L3-02', 3, 'Design CPP monitoring strategies'),

    ('VLR-07-L1-01', 1, 'Identify LSP components (WHO TRS 978 Annex 2)'),
    ('VLR-07-L1-02', 1, 'Navigate LSP documentation structure'),
    ('VLR-07-L2-01', 2, 'Evaluate manufacturing summary data'),
    ('VLR-07-L2-02', 2, 'Assess quality control test results'),
    ('VLR-07-L3-01', 3, 'Integrate LSP review with risk assessment'),
    ('VLR-07-L3-02', 3, 'Make evidence-based lot release decisions'),

    ('VLR-08-L1-01', 1, 'Describe lot release decision categories'),
    ('VLR-08-L1-02', 1, 'Identify documentation requirements'),
    ('VLR-08-L2-01', 2, 'Apply risk-based decision frameworks'),
    ('VLR-08-L2-02', 2, 'Evaluate conditional release scenarios'),
    ('VLR-08-L3-01', 3, 'Balance public health needs with quality assurance'),
    ('VLR-08-L3-02', 3, 'Design decision escalation procedures'),

    ('VLR-09-L1-01', 1, 'Define QbD core principles'),
    ('VLR-09-L1-02', 1, 'Describe TPQP and design space concepts'),
    ('VLR-09-L2-01', 2, 'Evaluate QbD implementation in submissions'),
    ('VLR-09-L2-02', 2, 'Assess PAT applications in manufacturing'),
    ('VLR-09-L3-01', 3, 'Apply QbD principles to lot release assessment'),
    ('VLR-09-L3-02', 3, 'Design lifecycle management approaches'),

    ('VLR-10-L1-01', 1, 'Identify major regulatory frameworks (WHO, ICH, PIC/S)'),
    ('VLR-10-L1-02', 1, 'Describe AMQF and regional harmonization initiatives'),
    ('VLR-10-L2-01', 2, 'Compare requirements across jurisdictions'),
    ('VLR-10-L2-02', 2, 'Apply reliance pathways appropriately'),
    ('VLR-10-L3-01', 3, 'Navigate complex multi-jurisdiction scenarios'),
    ('VLR-10-L3-02', 3, 'Contribute to harmonization initiatives'),
]

INSTRUMENT = {
    'name': 'VLR Competency Assessment v1.0',
    'type': 'COMBINED',
    'version': '1.0',
}

SELF_RATING_OPTIONS = [
    {'value': 1, 'label': 'No knowledge'},
    {'value': 2, 'label': 'Basic awareness'},
    {'value': 3, 'label': 'Can apply with guidance'},
    {'value': 4, 'label': 'Can apply independently'},
    {'value': 5, 'label': 'Can teach others'},
]

# the first N items of every area get a self-rating question
SELF_RATING_ITEMS_PER_AREA = 2


def _options(correct, *texts):
    return [
        {'label': label, 'text': text, 'is_correct': label == correct}
        for label, text in zip('ABCD', texts)
    ]


KNOWLEDGE_QUESTIONS = [
    {
        'item_code': 'VLR-05-L1-01',
        'question_text': 'Which of the following is classified as a Tier 1 Critical Quality Attribute that should NEVER be abbreviated during lot release assessment?',
        'options': _options('C', 'Appearance', 'Osmolality', 'Sterility', 'Extended stability data'),
        'correct_answer': 'C',
        'points': 1,
        'difficulty': 1,
        'rationale': 'Sterility is a Tier 1 CQA directly impacting patient safety and must always be verified regardless of timeline pressures.',
    },
    {
        'item_code': 'VLR-05-L2-01',
        'question_text': "A vaccine lot shows a potency result of 4.8 log TCID50/dose against a specification of ≥5.0 log TCID50/dose. The manufacturer's investigation indicates the assay was performed correctly and the result is valid. What is the appropriate regulatory action?",
        'options': _options(
            'B',
            'Approve the lot as the result is close to specification',
            'Reject the lot as it fails to meet the potency specification',
            'Request additional testing with a different method',
            'Approve with condition of enhanced stability monitoring',
        ),
        'correct_answer': 'B',
        'points': 2,
        'difficulty': 2,
        'rationale': 'A confirmed OOS result for a Tier 1 CQA (potency) requires rejection regardless of proximity to specification.',
    },
    {
        'item_code': 'VLR-07-L3-01',
        'question_text': 'You are reviewing an LSP for an mRNA COVID-19 vaccine lot. The manufacturing summary shows a temperature excursion during lipid nanoparticle formulation (4 hours at 28°C instead of the specified 15-25°C range). The manufacturer has provided an impact assessment stating that accelerated stability data shows no significant degradation. All CQA results meet specification. How would you approach this lot release decision?',
        'options': _options(
            'C',
            'Approve - all CQAs meet specification and stability data supports no impact',
            'Reject - any process deviation requires automatic rejection',
            'Request additional information on specific LNP stability data and conduct enhanced review',
            'Conditionally approve with requirement for enhanced post-release stability monitoring',
        ),
        'correct_answer': 'C',
        'points': 3,
        'difficulty': 3,
        'rationale': 'Expert-level assessment requires balancing multiple factors. While CQAs meet specification, a significant CPP deviation for a relatively new technology warrants enhanced scrutiny.',
    },
    {
        'item_code': 'VLR-01-L1-01',
        'question_text': 'Which vaccine platform uses weakened but live pathogens that can still replicate?',
        'options': _options('B', 'Inactivated vaccines', 'Live attenuated vaccines', 'Subunit vaccines', 'Conjugate vaccines'),
        'correct_answer': 'B',
        'points': 1,
        'difficulty': 1,
        'rationale': 'Live attenuated vaccines contain weakened forms of the pathogen that can replicate but typically do not cause disease in healthy individuals.',
    },
    {
        'item_code': 'VLR-02-L1-02',
        'question_text': 'Which of the following is NOT typically a critical upstream process parameter in cell culture?',
        'options': _options('C', 'Temperature', 'Dissolved oxygen', 'Container closure integrity', 'pH'),
        'correct_answer': 'C',
        'points': 1,
        'difficulty': 1,
        'rationale': 'Container closure integrity is a fill-finish parameter, not an upstream cell culture parameter.',
    },
    {
        'item_code': 'VLR-03-L2-01',
        'question_text': 'A chromatography column shows a 15% reduction in dynamic binding capacity compared to the qualified range. What is the most appropriate initial action?',
        'options': _options(
            'C',
            'Continue processing as the reduction is within acceptable limits',
            'Immediately replace the column',
            'Investigate root cause and assess impact on product quality',
            'Extend processing time to compensate',
        ),
        'correct_answer': 'C',
        'points': 2,
        'difficulty': 2,
        'rationale': 'A reduction in binding capacity requires investigation to understand the cause and potential impact before deciding on corrective action.',
    },
    {
        'item_code': 'VLR-04-L2-01',
        'question_text': 'Environmental monitoring during fill-finish shows elevated particle counts in a Grade A zone. What should be the immediate action?',
        'options': _options(
            'B',
            'Continue operations and document the excursion',
            'Stop filling operations and investigate',
            'Increase air changes per hour and continue',
            'Reduce personnel in the area',
        ),
        'correct_answer': 'B',
        'points': 2,
        'difficulty': 2,
        'rationale': 'Elevated particles in Grade A zones represent a potential contamination risk and require immediate cessation of activities.',
    },
    {
        'item_code': 'VLR-06-L2-02',
        'question_text': 'A process deviation occurred where the hold time between purification steps exceeded the validated maximum by 2 hours. Which information is MOST critical for the impact assessment?',
        'options': _options(
            'B',
            'Historical data on extended hold times',
            'Product stability data at the hold conditions',
            'Number of previous similar deviations',
            'Operator training records',
        ),
        'correct_answer': 'B',
        'points': 2,
        'difficulty': 2,
        'rationale': 'Product stability data at the actual hold conditions directly informs whether product quality was maintained.',
    },
    {
        'item_code': 'VLR-08-L2-01',
        'question_text': 'Under what circumstances might conditional lot release be appropriate?',
        'options': _options(
            'B',
            'When any CQA fails specification',
            'During a public health emergency with benefit-risk justification',
            'When manufacturing documentation is incomplete',
            'When stability data is pending',
        ),
        'correct_answer': 'B',
        'points': 2,
        'difficulty': 2,
        'rationale': 'Conditional release may be considered in public health emergencies when the benefit-risk assessment supports it and critical safety tests pass.',
    },
    {
        'item_code': 'VLR-09-L1-01',
        'question_text': 'What is the Target Product Quality Profile (TPQP) in Quality by Design?',
        'options': _options(
            'B',
            'The manufacturing process specifications',
            'A prospective summary of quality characteristics for the product',
            'The final release testing protocol',
            'The stability testing requirements',
        ),
        'correct_answer': 'B',
        'points': 1,
        'difficulty': 1,
        'rationale': 'TPQP is a prospective summary of the quality characteristics of a drug product that ideally will be achieved.',
    },
    {
        'item_code': 'VLR-10-L2-02',
        'question_text': 'When using a WHO prequalification decision as a basis for national registration, this is an example of:',
        'options': _options('B', 'Mutual recognition', 'Reliance pathway', 'Harmonization', 'Regulatory convergence'),
        'correct_answer': 'B',
        'points': 2,
        'difficulty': 2,
        'rationale': 'Reliance refers to taking into account and giving significant weight to assessments by other regulatory authorities or trusted organizations.',
    },
]

LEARNING_UNITS = [
    {
        'code': 'LU-VLR-01', 'name': 'Vaccine Platform Technologies Overview',
        'description': 'Comprehensive introduction to vaccine platform types and their manufacturing characteristics',
        'duration_hours': 4, 'delivery_methods': ['LECTURE', 'CASE_STUDY'],
        'learning_outcomes': [
            'Classify vaccines by platform type',
            'Describe manufacturing approach for each platform',
            'Identify platform-specific quality considerations',
        ],
        'level_number': 1, 'area_codes': ['VLR-01'],
    },
    {
        'code': 'LU-VLR-02', 'name': 'mRNA and Viral Vector Vaccines',
        'description': 'Advanced module on emerging vaccine technologies and their regulatory considerations',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'CASE_STUDY', 'WORKSHOP'],
        'learning_outcomes': [
            'Explain mRNA vaccine mechanism and manufacturing',
            'Describe viral vector vaccine platforms',
            'Identify unique regulatory challenges for novel platforms',
        ],
        'level_number': 2, 'area_codes': ['VLR-01'],
    },
    {
        'code': 'LU-VLR-03', 'name': 'Upstream Processing Principles',
        'description': 'Fundamentals of cell culture and fermentation in vaccine manufacturing',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'PRACTICAL', 'WORKSHOP'],
        'learning_outcomes': [
            'Explain cell culture and fermentation fundamentals',
            'Identify critical upstream parameters',
            'Interpret basic bioreactor data',
        ],
        'level_number': 1, 'area_codes': ['VLR-02'],
    },
    {
        'code': 'LU-VLR-04', 'name': 'Advanced Upstream Assessment',
        'description': 'Critical evaluation of upstream manufacturing data for regulatory review',
        'duration_hours': 8, 'delivery_methods': ['LECTURE', 'CASE_STUDY', 'WORKSHOP'],
        'learning_outcomes': [
            'Analyze complex bioreactor trending data',
            'Evaluate cell line qualification packages',
            'Assess upstream deviation impact',
        ],
        'level_number': 2, 'area_codes': ['VLR-02'],
    },
    {
        'code': 'LU-VLR-05', 'name': 'Downstream Processing Fundamentals',
        'description': 'Introduction to purification and clarification processes',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'PRACTICAL'],
        'learning_outcomes': [
            'Describe common purification methods',
            'Identify critical downstream parameters',
            'Understand viral clearance principles',
        ],
        'level_number': 1, 'area_codes': ['VLR-03'],
    },
    {
        'code': 'LU-VLR-06', 'name': 'Viral Clearance Assessment',
        'description': 'Evaluation of viral safety and clearance validation',
        'duration_hours': 8, 'delivery_methods': ['LECTURE', 'CASE_STUDY', 'WORKSHOP'],
        'learning_outcomes': [
            'Evaluate viral clearance study design',
            'Interpret clearance factor calculations',
            'Assess adequacy of viral safety package',
        ],
        'level_number': 2, 'area_codes': ['VLR-03'],
    },
    {
        'code': 'LU-VLR-07', 'name': 'Aseptic Processing and Fill-Finish',
        'description': 'Fundamentals of aseptic manufacturing and contamination control',
        'duration_hours': 8, 'delivery_methods': ['LECTURE', 'PRACTICAL', 'WORKSHOP'],
        'learning_outcomes': [
            'Describe aseptic processing requirements',
            'Evaluate environmental monitoring data',
            'Understand container closure integrity testing',
        ],
        'level_number': 1, 'area_codes': ['VLR-04'],
    },
    {
        'code': 'LU-VLR-08', 'name': 'CQA Fundamentals',
        'description': 'Understanding critical quality attributes and their assessment',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'CASE_STUDY'],
        'learning_outcomes': [
            'Define and categorize CQAs by tier',
            'Identify Tier 1 safety-critical attributes',
            'Interpret basic CQA test results',
        ],
        'level_number': 1, 'area_codes': ['VLR-05'],
    },
    {
        'code': 'LU-VLR-09', 'name': 'CQA Assessment and OOS Investigation',
        'description': 'Advanced evaluation of CQAs and out-of-specification results',
        'duration_hours': 8, 'delivery_methods': ['LECTURE', 'CASE_STUDY', 'WORKSHOP'],
        'learning_outcomes': [
            'Apply CQA tier classification in decisions',
            'Evaluate OOS investigation reports',
            'Determine regulatory responses to OOS',
        ],
        'level_number': 2, 'area_codes': ['VLR-05', 'VLR-08'],
    },
    {
        'code': 'LU-VLR-10', 'name': 'CPP Monitoring and Deviation Management',
        'description': 'Critical process parameters and their control',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'CASE_STUDY', 'WORKSHOP'],
        'learning_outcomes': [
            'Define CPPs and their CQA relationships',
            'Analyze CPP trending data',
            'Evaluate process deviation impact',
        ],
        'level_number': 2, 'area_codes': ['VLR-06'],
    },
    {
        'code': 'LU-VLR-11', 'name': 'LSP Review Fundamentals',
        'description': 'Introduction to Lot Summary Protocol review per WHO guidelines',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'CASE_STUDY'],
        'learning_outcomes': [
            'Navigate LSP structure (WHO TRS 978 Annex 2)',
            'Identify key documentation components',
            'Review manufacturing summary data',
        ],
        'level_number': 1, 'area_codes': ['VLR-07'],
    },
    {
        'code': 'LU-VLR-12', 'name': 'LSP Review and Lot Release Decision Making',
        'description': 'Advanced LSP review and regulatory decision frameworks',
        'duration_hours': 12, 'delivery_methods': ['LECTURE', 'CASE_STUDY', 'PRACTICAL', 'PEER_REVIEW'],
        'learning_outcomes': [
            'Integrate manufacturing, QC, and deviation data',
            'Apply risk-based decision frameworks',
            'Document and justify regulatory decisions',
        ],
        'level_number': 2, 'area_codes': ['VLR-07', 'VLR-08'],
    },
    {
        'code': 'LU-VLR-13', 'name': 'QbD Principles for Assessors',
        'description': 'Quality by Design concepts for regulatory assessment',
        'duration_hours': 6, 'delivery_methods': ['LECTURE', 'CASE_STUDY'],
        'learning_outcomes': [
            'Define QbD core principles',
            'Understand design space concepts',
            'Evaluate QbD elements in submissions',
        ],
        'level_number': 1, 'area_codes': ['VLR-09'],
    },
    {
        'code': 'LU-VLR-14', 'name': 'International Regulatory Frameworks',
        'description': 'Overview of global regulatory harmonization and reliance',
        'duration_hours': 4, 'delivery_methods': ['LECTURE', 'CASE_STUDY'],
        'learning_outcomes': [
            'Identify major regulatory frameworks',
            'Understand regional harmonization initiatives',
            'Apply reliance pathways',
        ],
        'level_number': 1, 'area_codes': ['VLR-10'],
    },
    {
        'code': 'LU-VLR-15', 'name': 'Practical LSP Review Workshop',
        'description': 'Hands-on workshop reviewing real LSP documents',
        'duration_hours': 16, 'delivery_methods': ['WORKSHOP', 'PRACTICAL', 'PEER_REVIEW'],
        'learning_outcomes': [
            'Complete full LSP review independently',
            'Identify compliance issues and quality concerns',
            'Make justified lot release recommendations',
        ],
        'level_number': 3, 'area_codes': ['VLR-07', 'VLR-08', 'VLR-05'],
    },
]


def _targets(default, **overrides):
    targets = {code: default for code, _, _ in AREAS}
    targets.update({key.replace('_', '-'): value for key, value in overrides.items()})
    return targets


ROLE_TARGETS = {
    'JUNIOR_INSPECTOR': _targets(1),
    'INSPECTOR': _targets(2, VLR_09=1),
    'SENIOR_INSPECTOR': _targets(2, VLR_05=3, VLR_07=3, VLR_08=3),
    'UNIT_MANAGER': _targets(2, VLR_05=3, VLR_07=3, VLR_08=3, VLR_09=3, VLR_10=3),
}

ORGANIZATIONS = [
    {'key': 'emkei', 'name': 'EMKEI Innovations', 'type': 'DEVELOPMENT_PARTNER', 'country': 'Kenya'},
    {'key': 'sahpra', 'name': 'SAHPRA (Demo)', 'type': 'NRA', 'country': 'South Africa'},
]

USERS = [
    {
        'email': 'admin@emkei.co.ke', 'password': 'Admin123!',
        'first_name': 'System', 'last_name': 'Administrator',
        'role': 'SYSTEM_ADMIN', 'organization': 'emkei',
    },
    {
        'email': 'facilitator@emkei.co.ke', 'password': 'Facilitator123!',
        'first_name': 'Demo', 'last_name': 'Facilitator',
        'role': 'FACILITATOR', 'organization': 'emkei',
    },
    {
        'email': 'participant@sahpra.org.za', 'password': 'Participant123!',
        'first_name': 'Demo', 'last_name': 'Participant',
        'role': 'PARTICIPANT', 'organization': 'sahpra',
        'participant_profile': {
            'job_title': 'Vaccine Inspector',
            'years_experience': 3,
            'education_level': 'MASTERS',
            'current_role_type': 'INSPECTOR',
            'professional_background': 'Background in pharmaceutical sciences with 3 years experience in vaccine regulatory assessment.',
        },
    },
]
